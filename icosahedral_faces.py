"""
Defines the golden rhombus face from which all of the 3D quasi-tiles are
built, together with the connector types which restrict how faces may be
joined.
"""


import copy
import enum

import numpy as np

from local_frames import Frame, norm, normalise, rotate_vector


# Acute angle of the rhombic faces of a regular icosahedral zonohedron
# (about 63.435 degrees)
FACE_ANGLE = np.arccos(1 / np.sqrt(5))

DEFAULT_FACE_SIDE = 20


class Connector(enum.Enum):
	"""
	The decoration of a face, which determines which other faces it may
	be attached to and how it is inflated.

	LINE connectors are symmetric and may be attached in two orientations.
	ARROW and TRIANGLE connectors are chiral and only fit one way round.
	"""
	ARROW = "arrow"
	TRIANGLE = "triangle"
	LINE = "line"


class Anchor(enum.Enum):
	"""Which point of a face is placed at the origin of its frame"""
	CENTRE = "centre"
	SHORT_AXIS = "short_axis"
	LONG_AXIS = "long_axis"


class IcosahedralFace:
	"""
	A rhombic face, as found on the icosahedral zonohedra. The ratio of
	its diagonals is the golden ratio.

	Faces are immutable: flipping or transforming one returns a new face.

	Attributes:
	  vertices          A read only 4x3 numpy array containing the
	                    vertices Pt1 to Pt4 in cyclic order. Pt1 and Pt3
	                    form the long diagonal, Pt2 and Pt4 the short one.
	  connector         The face's Connector type (read only)
	"""

	def __init__(self, frame=None, anchor=Anchor.CENTRE, connector=Connector.LINE,
	             side=DEFAULT_FACE_SIDE):
		"""
		Builds a face with sides of length side in the local xy-plane of
		frame (so its normal is the frame's local z), with the long
		diagonal along local x. Which point sits at the frame origin is
		given by anchor:

		  CENTRE            The centre of the rhombus
		  LONG_AXIS         Pt1, so the long diagonal starts at the origin
		  SHORT_AXIS        Pt2, after the rhombus has been turned by -90
		                    degrees so the short diagonal lies along x
		"""
		if frame is None: frame = Frame()
		if side <= 0:
			raise ValueError(f"side must be positive, not {side}")
		self._connector = Connector(connector)
		pointer = np.array([side, 0, 0])
		pointer_1 = rotate_vector(pointer, -FACE_ANGLE/2)
		pointer_2 = rotate_vector(pointer, +FACE_ANGLE/2)
		# Pt1 at the local origin, Pt3 at the far end of the long diagonal
		local_vertices = np.array([
			np.zeros(3),
			pointer_1,
			pointer_1 + pointer_2,
			pointer_2,
		])
		anchor = Anchor(anchor)
		if anchor == Anchor.CENTRE:
			local_vertices -= (local_vertices[0] + local_vertices[2]) / 2
		elif anchor == Anchor.LONG_AXIS:
			local_vertices -= local_vertices[0]
		elif anchor == Anchor.SHORT_AXIS:
			local_vertices -= (local_vertices[0] + local_vertices[2]) / 2
			local_vertices = np.array(
				[rotate_vector(v, -np.pi/2) for v in local_vertices])
			local_vertices -= local_vertices[1]
		self._set_vertices(frame.to_world(local_vertices))

	def __repr__(self):
		return f"IcosahedralFace(connector={self.connector.name}, centre={tuple(self.centre)})"

	@property
	def vertices(self):
		return self._vertices

	@property
	def connector(self):
		return self._connector

	@property
	def centre(self):
		"""The midpoint of the long diagonal"""
		return (self.vertices[0] + self.vertices[2]) / 2

	@property
	def long_axis(self):
		"""Unit vector from Pt1 to Pt3"""
		return normalise(self.vertices[2] - self.vertices[0])

	@property
	def short_axis(self):
		"""Unit vector from Pt2 to Pt4"""
		return normalise(self.vertices[3] - self.vertices[1])

	@property
	def normal(self):
		"""Unit normal, long_axis x short_axis"""
		return normalise(np.cross(self.long_axis, self.short_axis))

	@property
	def long_length(self):
		return norm(self.vertices[2] - self.vertices[0])

	@property
	def short_length(self):
		return norm(self.vertices[3] - self.vertices[1])

	def flipped_around_short_axis(self):
		"""
		Returns a copy of the face with the two vertices of the long
		diagonal (Pt1 and Pt3) swapped
		"""
		return self._with_vertices(self._vertices[[2, 1, 0, 3]])

	def flipped_around_long_axis(self):
		"""
		Returns a copy of the face with the two vertices of the short
		diagonal (Pt2 and Pt4) swapped
		"""
		return self._with_vertices(self._vertices[[0, 3, 2, 1]])

	def transformed(self, func):
		"""
		Returns a copy of the face with its vertices replaced by their
		images under func, a callable which takes and returns an array of
		points of shape (n, 3).
		"""
		return self._with_vertices(func(self._vertices))

	def _with_vertices(self, vertices):
		face = copy.copy(self)
		face._set_vertices(vertices)
		return face

	def _set_vertices(self, vertices):
		vertices = np.array(vertices, dtype=float)
		if vertices.shape != (4, 3):
			raise ValueError(f"A face needs 4 vertices in 3D, not an array of shape {vertices.shape}")
		vertices.setflags(write=False)
		self._vertices = vertices

	def edges(self):
		"""
		Returns a list of the 4 edges as (start, end) tuples, in the order
		Pt1-Pt2, Pt2-Pt3, Pt3-Pt4, Pt4-Pt1
		"""
		return [(self._vertices[i], self._vertices[(i+1) % 4]) for i in range(4)]

	def connector_glyph(self):
		"""
		Returns a list of (start, end) line segments marking the connector
		type on the face, for previews:

		  LINE              A bar along the middle of the long diagonal
		  ARROW             A bar along the short diagonal with an arrow
		                    head at the Pt2 end, pointing towards Pt2
		  TRIANGLE          A bar along the short diagonal closed into a
		                    triangle on the Pt3 side
		"""
		pt1, pt2, pt3, pt4 = self._vertices
		long_diagonal, short_diagonal = pt3 - pt1, pt4 - pt2
		if self._connector == Connector.LINE:
			return [(pt1 + 0.2*long_diagonal, pt1 + 0.8*long_diagonal)]
		start, end = pt2 + 0.2*short_diagonal, pt2 + 0.8*short_diagonal
		if self._connector == Connector.ARROW:
			barb = pt2 + 0.4*short_diagonal
			return [(start, end),
			        (start, barb + 0.2*long_diagonal),
			        (start, barb - 0.2*long_diagonal)]
		tip = pt2 + 0.5*short_diagonal + 0.25*long_diagonal
		return [(start, end), (start, tip), (end, tip)]
