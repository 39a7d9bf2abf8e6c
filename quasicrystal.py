"""
Implements generation of finite icosahedral quasi-crystals by repeated
inflation of quasi-tiles, along with two hard-coded starting arrangements
and export of the resulting tile edges as a wireframe.
"""


import enum
import logging
from dataclasses import dataclass

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

import tile_generations
from icosahedral_faces import DEFAULT_FACE_SIDE, Connector
from quasi_tiles import CENTRE_DECIMALS, ProlateRhombohedron, RhombicTriacontahedron
from quasi_tile_inflation import inflate_face


logger = logging.getLogger(__name__)

GLYPH_COLOURS = {
	Connector.LINE: "blue",
	Connector.ARROW: "red",
	Connector.TRIANGLE: "darkorange",
}


class FacePreview(enum.Enum):
	"""What is drawn on each face by show_tiles(), besides its outline"""
	NONE = "none"
	AXIS = "axis"
	CONNECTOR = "connector"


@dataclass(frozen=True)
class Beam:
	"""
	A straight beam between two points, with a radius at each end, as used
	to build a lattice solid from the edges of the tiles.

	The points are stored as tuples of floats, so beams can be compared
	and hashed.
	"""
	point_a: tuple
	radius_a: float
	point_b: tuple
	radius_b: float

	def __post_init__(self):
		object.__setattr__(self, "point_a", tuple(float(x) for x in self.point_a))
		object.__setattr__(self, "point_b", tuple(float(x) for x in self.point_b))


class QuasiCrystal(tile_generations.TileGenerations):
	"""
	A finite section of an icosahedral quasi-crystal, grown by replacing
	every face of every tile with its inflation.

	Each generation is deduplicated by the tiles' rounded centres (see
	quasi_tiles.QuasiTile.rounded_centre). The number of tiles grows very
	quickly, so num_generations should be kept to 3 or less.

	Every stored tile is frozen, including the initial tiles passed in, so
	a generation can no longer change once it has been built.

	Attributes:
	  generations       See tile_generations.TileGenerations
	"""

	def _inflate_tile(self, tile):
		inflated_tiles = []
		for face in tile.faces:
			inflated_tiles.extend(inflate_face(face))
		return inflated_tiles

	def _identity_key(self, tile):
		return tile_generations.rounded_point(tile.rounded_centre, CENTRE_DECIMALS)

	def _finalise_tile(self, tile):
		tile.freeze()

	def wireframe(self, generation, beam_radius):
		"""
		Returns a list of Beams, one along each edge of each face of each
		tile in the specified generation (so edges shared between faces
		appear more than once).
		"""
		if beam_radius <= 0:
			raise ValueError(f"beam_radius must be positive, not {beam_radius}")
		beams = []
		for tile in self.get_generation(generation):
			for face in tile.faces:
				for point_a, point_b in face.edges():
					beams.append(Beam(point_a, beam_radius, point_b, beam_radius))
		logger.info(f"Built wireframe of {len(beams)} beams from generation {generation}")
		return beams

	def show_plot(self, generation, show_axes=False, face_preview=FacePreview.NONE):
		"""
		Displays a matplotlib popup with the faces of every tile in the
		specified generation, coloured by tile type. See show_tiles().
		"""
		tiles = self.get_generation(generation)
		logger.info(f"Number of tiles = {len(tiles)}")
		show_tiles(tiles, show_axes, face_preview)


def face_preview_lines(tiles, face_preview):
	"""
	Returns a list of (segments, colour) pairs to draw on top of the faces
	of tiles, where segments is a list of (start, end) points.

	AXIS gives the long (green) and short (red) diagonal of each face.
	CONNECTOR gives the diagonals and the connector glyph of each face,
	coloured by connector type (see GLYPH_COLOURS).
	"""
	face_preview = FacePreview(face_preview)
	if face_preview == FacePreview.NONE:
		return []
	long_axes, short_axes = [], []
	glyphs = {connector: [] for connector in GLYPH_COLOURS}
	for tile in tiles:
		for face in tile.faces:
			long_axes.append((face.vertices[0], face.vertices[2]))
			short_axes.append((face.vertices[1], face.vertices[3]))
			if face_preview == FacePreview.CONNECTOR:
				glyphs[face.connector].extend(face.connector_glyph())
	lines = [(long_axes, "green"), (short_axes, "red")]
	lines.extend((segments, GLYPH_COLOURS[connector])
	             for connector, segments in glyphs.items() if segments)
	return lines


def show_tiles(tiles, show_axes=False, face_preview=FacePreview.NONE):
	"""
	Displays a matplotlib popup with the faces of each of the quasi-tiles
	in tiles, coloured by tile type.

	face_preview (a FacePreview) adds the diagonals of each face, and
	optionally its connector glyph, see face_preview_lines().
	"""
	fig = plt.figure()
	ax = fig.add_subplot(projection="3d")
	all_vertices = []
	for tile in tiles:
		polygons = [face.vertices for face in tile.faces]
		ax.add_collection3d(Poly3DCollection(
			polygons, facecolor=tile.colour, edgecolor="black",
			linewidth=0.3, alpha=0.9))
		all_vertices.extend(polygons)
	for segments, colour in face_preview_lines(tiles, face_preview):
		ax.add_collection3d(Line3DCollection(segments, colors=colour, linewidth=0.8))
	# add_collection3d() doesn't rescale the axes
	all_vertices = np.concatenate(all_vertices)
	centre = (all_vertices.max(axis=0) + all_vertices.min(axis=0)) / 2
	half_width = (all_vertices.max(axis=0) - all_vertices.min(axis=0)).max() / 2
	ax.set_xlim(centre[0] - half_width, centre[0] + half_width)
	ax.set_ylim(centre[1] - half_width, centre[1] + half_width)
	ax.set_zlim(centre[2] - half_width, centre[2] + half_width)
	if show_axes:
		ax.set_xlabel(r"x")
		ax.set_ylabel(r"y")
		ax.set_zlabel(r"z")
	else:
		ax.set_axis_off()
	plt.show()


def crystal_from_face(num_generations, face, print_progress=False):
	"""
	Returns a QuasiCrystal whose generation 0 is the inflation of a single
	IcosahedralFace.
	"""
	return QuasiCrystal(num_generations, inflate_face(face), print_progress)


def new_quasicrystal(num_generations, seed="first", face_side=DEFAULT_FACE_SIDE,
                     print_progress=False):
	"""
	Generates and returns a QuasiCrystal grown from one of the hard-coded
	starting arrangements.

	Seeds:
	  "first"   20 prolate rhombohedra in four rows of 5, see
	            first_generation_tiles()
	  "second"  12 rhombic triacontahedra, see second_generation_tiles()
	"""
	if seed == "first":
		initial_tiles = first_generation_tiles(face_side)
	elif seed == "second":
		initial_tiles = second_generation_tiles(face_side)
	else:
		raise ValueError(f"The seed '{seed}' is not supported")
	return QuasiCrystal(num_generations, initial_tiles, print_progress)


def first_generation_tiles(face_side=DEFAULT_FACE_SIDE):
	"""
	Returns 20 prolate rhombohedra: a ring of 5 sharing an edge, followed
	by three further rows of 5, each tile attached to the corresponding
	tile in the previous row.
	"""
	if face_side <= 0:
		raise ValueError(f"face_side must be positive, not {face_side}")
	rows = [[ProlateRhombohedron(face_side=face_side) for _ in range(5)] for _ in range(4)]
	first_row = rows[0]
	for i in range(1, 4):
		first_row[i].attach_to(0, first_row[i-1], 1)
	first_row[4].attach_to(1, first_row[0], 0)
	# Rows 2-4 are attached alternately via faces 2 and 1
	for previous_row, row, other_face in zip(rows, rows[1:], (2, 1, 2)):
		for tile, previous_tile in zip(row, previous_row):
			tile.attach_to(0, previous_tile, other_face)
	return [tile for row in rows for tile in row]


def second_generation_tiles(face_side=DEFAULT_FACE_SIDE):
	"""
	Returns 12 rhombic triacontahedra, attached to the outer faces of the
	tiles returned by first_generation_tiles() (which are not included).
	"""
	first_tiles = first_generation_tiles(face_side)
	# (index into first_tiles, face index) for each triacontahedron
	attachments = [(0, 4), (0, 5), (1, 5), (2, 5), (3, 5), (4, 5),
	               (15, 5), (16, 5), (17, 5), (18, 5), (19, 5), (19, 3)]
	tiles = []
	for tile_index, face_index in attachments:
		tile = RhombicTriacontahedron(face_side=face_side)
		tile.attach_to(1, first_tiles[tile_index], face_index)
		tiles.append(tile)
	return tiles
