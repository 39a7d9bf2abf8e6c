"""
Defines the QuasiTile type, a closed polyhedron built from IcosahedralFaces,
along with the four elementary tile shapes used by the quasi-crystal
inflation.

Tiles are positioned relative to each other by attaching a face of one
tile onto a face of another with a matching connector type.
"""


import logging

import numpy as np

from local_frames import Frame, normalise
from icosahedral_faces import (Anchor, Connector, IcosahedralFace,
                               DEFAULT_FACE_SIDE)


logger = logging.getLogger(__name__)

# Precision (in decimal places) used to identify vertices and tile centres
CENTRE_DECIMALS = 4


class FaceNotFoundError(IndexError):
	"""Raised when attaching via a face index which does not exist"""


class ThisFaceNotFoundError(FaceNotFoundError):
	"""The face index on the tile being moved does not exist"""


class OtherFaceNotFoundError(FaceNotFoundError):
	"""The face index on the tile being attached to does not exist"""


class ConnectorMismatchError(ValueError):
	"""Raised when attaching two faces with different connector types"""


class FrozenTileError(AttributeError):
	"""Raised when moving a tile which has been frozen"""


class QuasiTile:
	"""
	A template class for the 3D quasi-tiles.

	Subclasses build their faces in __init__, pass them on to
	QuasiTile.__init__ and override the class attribute colour.

	A tile can only be moved (by apply_transform() or attach_to()) until
	freeze() is called. The faces themselves are immutable.

	Attributes:
	  colour            The matplotlib colour used to draw the tile
	"""

	colour = "grey"

	def __init__(self, faces):
		self._faces = list(faces)
		self._rounded_centre = None
		self._frozen = False

	def __repr__(self):
		return (f"{type(self).__name__}(num_faces={len(self._faces)}, "
		        f"rounded_centre={tuple(self.rounded_centre)})")

	@property
	def faces(self):
		"""A tuple of the tile's IcosahedralFaces, in construction order"""
		return tuple(self._faces)

	@property
	def num_faces(self):
		return len(self._faces)

	@property
	def frozen(self):
		return self._frozen

	def freeze(self):
		"""Prevents the tile from being moved from now on"""
		self._frozen = True

	def vertices(self):
		"""
		Returns a list of the distinct vertices of the tile (as 1D numpy
		arrays), each rounded to CENTRE_DECIMALS decimal places.
		"""
		unique_vertices = {}
		for face in self._faces:
			for vertex in np.round(face.vertices, CENTRE_DECIMALS):
				# Normalise negative zeros so they compare equal to zero
				key = tuple(float(x) + 0.0 for x in vertex)
				unique_vertices.setdefault(key, vertex)
		return list(unique_vertices.values())

	@property
	def rounded_centre(self):
		"""
		The average of the tile's distinct vertices, rounded to
		CENTRE_DECIMALS decimal places (as a read only numpy array).

		Calculated on first access and cached until the tile is next moved.
		"""
		if self._rounded_centre is None:
			centre = np.round(np.mean(self.vertices(), axis=0), CENTRE_DECIMALS) + 0.0
			centre.setflags(write=False)
			self._rounded_centre = centre
		return self._rounded_centre

	def apply_transform(self, func):
		"""
		Moves every vertex of every face through func, a callable which
		takes and returns an array of points of shape (n, 3).

		Raises FrozenTileError if the tile has been frozen.
		"""
		if self._frozen:
			raise FrozenTileError(f"Cannot move a frozen {type(self).__name__}")
		self._faces = [face.transformed(func) for face in self._faces]
		self._rounded_centre = None

	def connector_frame(self, face_index, alternate=False):
		"""
		Returns a Frame sitting on the centre of the specified face.

		The local z axis points out of the tile and the local x axis points
		along the long axis of the face. For LINE faces, alternate=True
		reverses local x, giving the second of the two valid orientations.
		"""
		face = self._faces[face_index]
		local_z = face.normal
		if np.dot(local_z, face.centre - self.rounded_centre) < 0:
			local_z = -local_z
		local_x = face.long_axis
		if alternate and face.connector == Connector.LINE:
			local_x = -local_x
		return Frame(face.centre, local_z, local_x)

	def attach_to(self, this_face_index, other_tile, other_face_index,
	              alternate=False):
		"""
		Moves this tile (rigidly) so that its face this_face_index lies on
		the face other_face_index of other_tile, back to back.

		other_tile is left unchanged, as is this tile if an exception is
		raised.

		Raises ThisFaceNotFoundError or OtherFaceNotFoundError if either
		index is out of range, and ConnectorMismatchError if the two faces
		have different connector types. Raises FrozenTileError if this
		tile has been frozen.
		"""
		if not 0 <= this_face_index < self.num_faces:
			raise ThisFaceNotFoundError(
				f"Face {this_face_index} not found on {type(self).__name__} "
				f"({self.num_faces} faces)")
		if not 0 <= other_face_index < other_tile.num_faces:
			raise OtherFaceNotFoundError(
				f"Face {other_face_index} not found on {type(other_tile).__name__} "
				f"({other_tile.num_faces} faces)")
		this_connector = self._faces[this_face_index].connector
		other_connector = other_tile.faces[other_face_index].connector
		if this_connector != other_connector:
			raise ConnectorMismatchError(
				f"Cannot attach a {this_connector.name} face to a "
				f"{other_connector.name} face")

		source_frame = self.connector_frame(this_face_index).inverted(invert_z=True)
		target_frame = other_tile.connector_frame(other_face_index, alternate)
		self.apply_transform(
			lambda points: target_frame.to_world(source_frame.to_local(points)))
		logger.debug(f"Attached face {this_face_index} of {type(self).__name__} to "
		             f"face {other_face_index} of {type(other_tile).__name__}")


class ProlateRhombohedron(QuasiTile):
	"""
	The 6-faced golden rhombohedron with 3-fold symmetry about the local z
	axis of its frame.

	Faces 0-2 form the lower dome (TRIANGLE connectors) and faces 3-5 the
	upper dome (LINE connectors).
	"""

	colour = "red"

	def __init__(self, frame=None, face_side=DEFAULT_FACE_SIDE):
		if frame is None: frame = Frame()
		tilt_angle = _dome_tilt_angle(3, face_side)
		lower_centre_faces = _dome_faces(frame, 3, tilt_angle, Connector.TRIANGLE, face_side)

		upper_frame = _mirrored_frame(frame, lower_centre_faces[0].vertices[1],
		                              lower_centre_faces[0].vertices[2])
		upper_centre_faces = _dome_faces(upper_frame, 3, tilt_angle, Connector.LINE, face_side)

		lower_centre_faces = [face.flipped_around_short_axis().flipped_around_long_axis()
		                      for face in lower_centre_faces]
		super().__init__(lower_centre_faces + upper_centre_faces)


class RhombicDodecahedron(QuasiTile):
	"""
	The 12-faced golden rhombic dodecahedron (2-fold symmetry).

	Faces 0 and 1 are the bottom and top faces (LINE), faces 2 and 3 the
	two side faces joining them (TRIANGLE). Faces 4-11 bridge the bottom,
	top and side faces, four per side face, with connectors ARROW, ARROW,
	TRIANGLE, TRIANGLE.
	"""

	colour = "yellowgreen"

	def __init__(self, frame=None, face_side=DEFAULT_FACE_SIDE):
		if frame is None: frame = Frame()
		long_length = IcosahedralFace(frame, Anchor.LONG_AXIS, side=face_side).long_length
		top_frame = frame.translated(long_length * frame.local_z).inverted(True, True)

		bottom_face = IcosahedralFace(frame, Anchor.CENTRE, Connector.LINE, face_side)
		top_face = IcosahedralFace(top_frame, Anchor.CENTRE, Connector.LINE, face_side)
		bottom, top = bottom_face.vertices, top_face.vertices

		side_faces = []
		angled_faces = []
		# Side faces stand on the short-diagonal vertices of the bottom face
		for i in (1, 3):
			side_bottom, side_top = bottom[i], top[i]
			long_dir = normalise(side_top - side_bottom)
			short_dir = normalise(bottom[2] - bottom[0])
			side_face = IcosahedralFace(
				Frame(side_bottom, np.cross(long_dir, short_dir), long_dir),
				Anchor.LONG_AXIS, Connector.TRIANGLE, face_side)
			side = side_face.vertices
			side_faces.append(side_face)

			angled_faces.extend([
				_bridging_face(side_bottom, bottom[0], side[1], Connector.ARROW, face_side),
				_bridging_face(side_bottom, bottom[2], side[3], Connector.ARROW, face_side),
				_bridging_face(side_top, top[0], side[3], Connector.TRIANGLE, face_side),
				_bridging_face(side_top, top[2], side[1], Connector.TRIANGLE, face_side),
			])

		side_faces = [face.flipped_around_short_axis().flipped_around_long_axis()
		              for face in side_faces]
		super().__init__([bottom_face, top_face] + side_faces + angled_faces)


class RhombicIcosahedron(QuasiTile):
	"""
	The 20-faced golden rhombic icosahedron, with 5-fold symmetry about the
	local z axis of its frame.

	Attributes (face indices):
	  0-4               Lower centre faces, meeting at the frame origin
	                    (TRIANGLE)
	  5-9               Lower side faces (ARROW)
	  10-14             Upper side faces (LINE)
	  15-19             Upper centre faces (LINE)
	"""

	colour = "lightblue"

	def __init__(self, frame=None, face_side=DEFAULT_FACE_SIDE):
		if frame is None: frame = Frame()
		tilt_angle = _dome_tilt_angle(5, face_side)
		lower_centre_faces = _dome_faces(frame, 5, tilt_angle, Connector.TRIANGLE, face_side)
		lower_side_faces = _dome_side_faces(lower_centre_faces, Connector.ARROW, face_side)

		upper_frame = _mirrored_frame(frame, lower_side_faces[0].vertices[0],
		                              lower_side_faces[0].vertices[1])
		upper_centre_faces = _dome_faces(upper_frame, 5, tilt_angle, Connector.LINE, face_side)
		upper_side_faces = _dome_side_faces(upper_centre_faces, Connector.LINE, face_side)

		super().__init__(lower_centre_faces + lower_side_faces
		                 + upper_side_faces + upper_centre_faces)


class RhombicTriacontahedron(QuasiTile):
	"""
	The 30-faced rhombic triacontahedron, with 5-fold symmetry about the
	local z axis of its frame.

	It is built as a RhombicIcosahedron whose two halves are separated by
	one face side along the symmetry axis, with the gap closed by an
	equatorial belt of 10 faces.

	Attributes (face indices):
	  0-4               Lower centre faces, meeting at the frame origin
	                    (LINE)
	  5-9               Lower side faces (TRIANGLE)
	  10-19             Equatorial belt, alternating ARROW (even indices)
	                    and LINE (odd indices)
	  20-24             Upper side faces (TRIANGLE)
	  25-29             Upper centre faces (ARROW)
	"""

	colour = "mediumpurple"

	def __init__(self, frame=None, face_side=DEFAULT_FACE_SIDE):
		if frame is None: frame = Frame()
		tilt_angle = _dome_tilt_angle(5, face_side)
		lower_centre_faces = _dome_faces(frame, 5, tilt_angle, Connector.LINE, face_side)
		lower_side_faces = _dome_side_faces(lower_centre_faces, Connector.TRIANGLE, face_side)

		# The belt faces share one edge with the lower dome's rim and have
		# the other parallel to the symmetry axis
		zone_vector = face_side * frame.local_z
		belt_faces = []
		for i in range(5):
			tip = lower_centre_faces[i].vertices[2]
			for j, connector in ((i, Connector.ARROW), ((i+1) % 5, Connector.LINE)):
				long_dir = normalise(lower_side_faces[j].vertices[1] + zone_vector - tip)
				belt_faces.append(IcosahedralFace(
					Frame(tip, np.cross(long_dir, zone_vector), long_dir),
					Anchor.LONG_AXIS, connector, face_side))

		upper_frame = _mirrored_frame(frame, lower_side_faces[0].vertices[0],
		                              lower_side_faces[0].vertices[1],
		                              extra_height=face_side)
		upper_centre_faces = _dome_faces(upper_frame, 5, tilt_angle, Connector.ARROW, face_side)
		upper_side_faces = _dome_side_faces(upper_centre_faces, Connector.TRIANGLE, face_side)

		super().__init__(lower_centre_faces + lower_side_faces + belt_faces
		                 + upper_side_faces + upper_centre_faces)


def _dome_tilt_angle(symmetry_order, face_side):
	"""
	Returns the angle by which the centre faces of a dome are tilted about
	their local y axis, such that symmetry_order faces meeting at the
	origin share their short-diagonal vertices.
	"""
	reference_face = IcosahedralFace(Frame(), Anchor.LONG_AXIS, side=face_side)
	polygon_side = reference_face.short_length
	# Inradius of the regular polygon formed by the short-diagonal vertices
	polygon_height = polygon_side / (2 * np.tan(np.pi / symmetry_order))
	return -(np.pi/2 - np.arcsin(polygon_height / (reference_face.long_length / 2)))


def _dome_faces(frame, symmetry_order, tilt_angle, connector, face_side):
	faces = []
	for i in range(symmetry_order):
		face_frame = frame.rotated(i * 2*np.pi/symmetry_order, frame.local_z)
		face_frame = face_frame.rotated(tilt_angle, face_frame.local_y)
		faces.append(IcosahedralFace(face_frame, Anchor.LONG_AXIS, connector, face_side))
	return faces


def _dome_side_faces(centre_faces, connector, face_side):
	"""
	Returns the faces filling the gaps between the tips of neighbouring
	centre faces, one per centre face.
	"""
	faces = []
	for i in range(len(centre_faces)):
		face_1, face_2 = centre_faces[i-1], centre_faces[i]
		tip_1, tip_2 = face_1.vertices[2], face_2.vertices[2]
		long_dir = normalise(tip_2 - tip_1)
		short_dir = normalise(face_1.vertices[3] - (tip_1 + tip_2)/2)
		faces.append(IcosahedralFace(
			Frame(tip_1, np.cross(long_dir, short_dir), long_dir),
			Anchor.LONG_AXIS, connector, face_side))
	return faces


def _mirrored_frame(frame, lower_point, upper_point, extra_height=0):
	"""
	Returns the frame from which the upper half of a tile is built: frame
	turned upside down and raised by the sum of the heights (along its
	local z) of lower_point and upper_point, plus extra_height.
	"""
	height = frame.to_local(lower_point)[2] + frame.to_local(upper_point)[2] + extra_height
	return frame.translated(height * frame.local_z).inverted(True, True)


def _bridging_face(origin, corner, far_corner, connector, face_side):
	"""
	Returns the face with its long diagonal starting at origin and running
	through the midpoint of corner and far_corner (its short diagonal).
	"""
	centre = (corner + far_corner) / 2
	long_dir = normalise(centre - origin)
	short_dir = normalise(centre - corner)
	return IcosahedralFace(Frame(origin, np.cross(long_dir, short_dir), long_dir),
	                       Anchor.LONG_AXIS, connector, face_side)
