"""
Example uses of the 2D and 3D tiling generators, each displaying its result
in a matplotlib popup.

Run as a script to show the Penrose pattern and a quasi-crystal grown from
a single face.
"""


import logging

import numpy as np
import matplotlib.pyplot as plt

import logging_config
import penrose_tilings
import quasicrystal
from quasicrystal import FacePreview
from local_frames import Frame
from icosahedral_faces import Anchor, Connector, IcosahedralFace
from quasi_tiles import (ProlateRhombohedron, RhombicDodecahedron,
                         RhombicIcosahedron, RhombicTriacontahedron)


logger = logging.getLogger(__name__)


def penrose_pattern_task(num_generations=5):
	"""Grows a Penrose pattern and shows its last generation"""
	pattern = penrose_tilings.PenrosePattern(num_generations, print_progress=True)
	logger.info(f"Tile counts: {_named_counts(pattern.count_tiles(num_generations - 1))}")
	pattern.show_plot(num_generations - 1)


def introduce_quasi_tiles_task():
	"""
	Shows the four elementary quasi-tiles side by side, with the connector
	type marked on every face
	"""
	tiles = [
		ProlateRhombohedron(Frame((100, 0, 0)), 20),
		RhombicDodecahedron(Frame((40, 0, 0)), 20),
		RhombicIcosahedron(Frame((-30, 0, 0)), 20),
		RhombicTriacontahedron(Frame((-100, 0, 0)), 20),
	]
	for tile in tiles:
		logger.info(f"{type(tile).__name__}: {tile.num_faces} faces, "
		            f"centre {tuple(tile.rounded_centre)}")
	quasicrystal.show_tiles(tiles, show_axes=True, face_preview=FacePreview.CONNECTOR)


def crystal_from_face_task(connector=Connector.LINE, num_generations=2):
	"""
	Grows a quasi-crystal from a single face and shows its last generation.

	num_generations should be 1 or 2.
	"""
	face = IcosahedralFace(Frame(), Anchor.CENTRE, connector, 200)
	crystal = quasicrystal.crystal_from_face(num_generations, face, print_progress=True)
	crystal.show_plot(num_generations - 1)


def crystal_from_tile_task(num_generations=2, use_preset=False):
	"""
	Grows a quasi-crystal from a single rhombic triacontahedron (or from
	the first hard-coded arrangement if use_preset is True) and shows its
	last generation.
	"""
	if use_preset:
		crystal = quasicrystal.new_quasicrystal(num_generations, "first", print_progress=True)
	else:
		crystal = quasicrystal.QuasiCrystal(num_generations, [RhombicTriacontahedron(Frame(), 50)],
		                                    print_progress=True)
	logger.info(f"Tile counts: {_named_counts(crystal.count_tiles(num_generations - 1))}")
	crystal.show_plot(num_generations - 1, show_axes=True, face_preview=FacePreview.AXIS)


def wireframe_from_crystal_task(num_generations=2, beam_radius=1):
	"""
	Builds the wireframe of a quasi-crystal grown from a single rhombic
	dodecahedron and plots its beams.
	"""
	crystal = quasicrystal.QuasiCrystal(num_generations, [RhombicDodecahedron(Frame(), 50)],
	                                    print_progress=True)
	beams = crystal.wireframe(num_generations - 1, beam_radius)
	fig = plt.figure()
	ax = fig.add_subplot(projection="3d")
	for beam in beams:
		x, y, z = np.array([beam.point_a, beam.point_b]).T
		ax.plot(x, y, z, linestyle="-", color="blue", linewidth=beam.radius_a)
	ax.set_axis_off()
	plt.show()


def _named_counts(count_dict):
	return {tile_type.__name__: count for tile_type, count in count_dict.items()}


if __name__ == "__main__":
	logging_config.setup_logging()
	penrose_pattern_task()
	crystal_from_face_task()
