"""
Defines the Frame type, a rigid local coordinate system in 3D, along with a
few vector helper functions used throughout the tiling code.
"""


import numpy as np
from scipy.spatial.transform import Rotation


class Frame:
	"""
	Represents a local coordinate frame: an origin and an orthonormal,
	right-handed basis.

	Frames are treated as immutable values. Every method which produces a
	modified frame returns a new Frame object.

	Attributes:
	  origin            A 1D numpy array of length 3 containing the world
	                    coordinates of the frame's origin
	  local_x           Unit vector (1D numpy array) along the local x axis
	  local_y           Unit vector along the local y axis, always equal to
	                    local_z x local_x
	  local_z           Unit vector along the local z axis
	"""

	def __init__(self, origin=(0,0,0), local_z=(0,0,1), local_x=None):
		"""
		local_z need not be normalised. local_x need not be normalised or
		exactly perpendicular to local_z (only its component perpendicular
		to local_z is used). If local_x is not specified, an arbitrary
		perpendicular direction is chosen.
		"""
		origin = np.array(origin, dtype=float)
		local_z = normalise(local_z)
		if local_x is None:
			local_x = _perpendicular_to(local_z)
		local_x = np.array(local_x, dtype=float)
		local_x = local_x - np.dot(local_x, local_z) * local_z
		if norm(local_x) < 1e-12:
			raise ValueError("local_x must not be parallel to local_z")
		local_x = normalise(local_x)
		self.origin = origin
		self.local_x = local_x
		self.local_y = np.cross(local_z, local_x)
		self.local_z = local_z

	def __repr__(self):
		return (f"Frame(origin={tuple(self.origin)}, local_z={tuple(self.local_z)}, "
		        f"local_x={tuple(self.local_x)})")

	@property
	def basis(self):
		"""A 3x3 numpy array whose rows are local_x, local_y and local_z"""
		return np.array([self.local_x, self.local_y, self.local_z])

	def to_local(self, points):
		"""
		Expresses world coordinates in this frame.

		points may be a single point or any array-like of shape (..., 3).
		The result has the same shape.
		"""
		return (np.asarray(points, dtype=float) - self.origin) @ self.basis.T

	def to_world(self, points):
		"""
		Maps points given in this frame's local coordinates into world
		coordinates. This is the exact inverse of to_local().
		"""
		return self.origin + np.asarray(points, dtype=float) @ self.basis

	def rotated(self, angle, axis):
		"""
		Returns a new frame with the same origin, whose axes are those of
		this frame rotated (right-handedly) by angle about the direction
		axis.

		Usually axis will be one of the frame's own axes.
		"""
		rotation = Rotation.from_rotvec(angle * normalise(axis))
		return Frame(self.origin, rotation.apply(self.local_z),
		             rotation.apply(self.local_x))

	def translated(self, vector):
		"""Returns a new frame with the origin shifted by vector"""
		return Frame(self.origin + np.asarray(vector, dtype=float),
		             self.local_z, self.local_x)

	def inverted(self, invert_z=False, invert_x=False):
		"""
		Returns a new frame with the local z and/or x axes reversed.

		The local y axis is derived again from the new z and x, so the
		result is still right-handed: inverting only z turns the frame
		180 degrees about its x axis, and inverting both turns it 180
		degrees about its y axis.
		"""
		local_z = -self.local_z if invert_z else self.local_z
		local_x = -self.local_x if invert_x else self.local_x
		return Frame(self.origin, local_z, local_x)


def norm(vector):
	"""
	Returns the magnitude of a vector (passed as a 1D numpy array)
	"""
	return np.sqrt(np.square(vector).sum())


def normalise(vector):
	"""Returns a unit vector parallel to vector"""
	vector = np.asarray(vector, dtype=float)
	length = norm(vector)
	if length == 0:
		raise ValueError("Cannot normalise a zero-length vector")
	return vector / length


def rotate_vector(vector, angle, axis=(0,0,1), pivot=None):
	"""
	Rotates a 3D vector (or point) right-handedly by angle about axis.

	If pivot is specified, the rotation axis passes through the point
	pivot rather than the origin.
	"""
	rotation = Rotation.from_rotvec(angle * normalise(axis))
	vector = np.asarray(vector, dtype=float)
	if pivot is None:
		return rotation.apply(vector)
	pivot = np.asarray(pivot, dtype=float)
	return pivot + rotation.apply(vector - pivot)


def _perpendicular_to(direction):
	# Project whichever world axis is least aligned with direction
	trial_axis = np.zeros(3)
	trial_axis[np.argmin(np.abs(direction))] = 1
	return normalise(trial_axis - np.dot(trial_axis, direction) * direction)
