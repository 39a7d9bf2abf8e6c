"""
Implements inflation-based generation of the rhombus (P3) Penrose tiling,
with both rhombi built from pairs of Robinson triangles.
"""


import logging

import numpy as np
import matplotlib.pyplot as plt
from scipy.constants import golden as GOLDEN_RATIO

import tile_generations


logger = logging.getLogger(__name__)

# Fraction along an edge at which inflation splits it, (sqrt(5)-1)/2
PSI = 1 / GOLDEN_RATIO

DEFAULT_INITIAL_SIDE = 20

# Dedup precision for 2D tile centres (in decimal places)
CENTRE_DECIMALS = 2


class RobinsonTriangle:
	"""
	An isosceles triangle, half of one of the two Penrose rhombi.

	The edge from A to C forms the base, B is the tip. The vertex arrays
	are read only.

	Attributes:
	  a, b, c           1D numpy arrays of length 2 containing the cartesian
	                    coordinates of the three vertices
	  centre            The midpoint of the base
	"""

	def __init__(self, a, b, c):
		self.a, self.b, self.c = (_read_only(np.array(p, dtype=float)) for p in (a, b, c))
		self.centre = _read_only((self.a + self.c) / 2)

	def flipped(self):
		"""
		Returns a new triangle on the same base, with the tip reflected
		through the centre of the base.
		"""
		return RobinsonTriangle(self.a, self.b + 2*(self.centre - self.b), self.c)


class RhombicTile:
	"""
	A template class for the two Penrose rhombi.

	Each rhombus is made up of a Robinson triangle and its flipped copy.

	Attributes:
	  triangles         A tuple of the two RobinsonTriangle objects making
	                    up the tile (the second being the flip of the first)
	"""

	def __init__(self, triangle):
		self.triangles = (triangle, triangle.flipped())

	@property
	def vertices(self):
		"""
		A list of copies of the 4 vertices of the rhombus, in the order A,
		B, C, B'
		"""
		triangle, flipped_triangle = self.triangles
		return [triangle.a.copy(), triangle.b.copy(), triangle.c.copy(),
		        flipped_triangle.b.copy()]

	@property
	def centre(self):
		"""The average of the tile's vertices"""
		return np.mean(self.vertices, axis=0)

	def inflate_once(self):
		"""
		This should return a list of the new (smaller) tiles with which to
		replace this one.
		"""
		raise NotImplementedError(f"The class {type(self).__name__} is a "
		                          f"subclass of penrose_tilings.RhombicTile but "
		                          f"lacks an inflate_once() method")


class SmallRhombicTile(RhombicTile):
	"""
	The skinny Penrose rhombus (acute angle of 36 degrees)

	Inflation yields two SmallRhombicTiles and two LargeRhombicTiles.
	"""

	def inflate_once(self):
		return [tile for tri in self.triangles for tile in inflate_skinny_triangle(tri)]


class LargeRhombicTile(RhombicTile):
	"""
	The fat Penrose rhombus (acute angle of 72 degrees)

	Inflation yields two SmallRhombicTiles and four LargeRhombicTiles.
	"""

	def inflate_once(self):
		return [tile for tri in self.triangles for tile in inflate_fat_triangle(tri)]


def inflate_skinny_triangle(triangle):
	"""
	Returns the two tiles which replace one half of a skinny rhombus.

	The edge from B to A is split at the fraction PSI along it.
	"""
	a, b, c = triangle.a, triangle.b, triangle.c
	d = b + PSI * (a - b)
	return [
		SmallRhombicTile(RobinsonTriangle(d, c, a)),
		LargeRhombicTile(RobinsonTriangle(c, d, b)),
	]


def inflate_fat_triangle(triangle):
	"""
	Returns the three tiles which replace one half of a fat rhombus.

	The edges from A to B and from A to C are both split at the fraction
	PSI along them.
	"""
	a, b, c = triangle.a, triangle.b, triangle.c
	d = a + PSI * (b - a)
	e = a + PSI * (c - a)
	return [
		LargeRhombicTile(RobinsonTriangle(e, d, a)),
		SmallRhombicTile(RobinsonTriangle(d, e, b)),
		LargeRhombicTile(RobinsonTriangle(c, e, b)),
	]


def initial_tiles(side=DEFAULT_INITIAL_SIDE, centre=(0,0)):
	"""
	Returns the default 5-fold symmetric starting pattern: five fat rhombi
	with their 72 degree corners meeting at centre, each rotated by 2pi/5
	from the last.
	"""
	if side <= 0:
		raise ValueError(f"side must be positive, not {side}")
	centre = np.array(centre, dtype=float)
	apex_angle = np.radians(108)
	tiles = []
	for i in range(5):
		alpha = 2*np.pi/5 * i
		a = centre
		b = centre + side * np.array([np.cos(alpha), np.sin(alpha)])
		# C is A rotated by the apex angle about B
		c = b + _rotate_2d(a - b, apex_angle)
		tiles.append(LargeRhombicTile(RobinsonTriangle(a, b, c)))
	return tiles


class PenrosePattern(tile_generations.TileGenerations):
	"""
	A finite section of the rhombus Penrose tiling, generated by repeated
	inflation of a 5-fold symmetric ring of fat rhombi.

	Each generation is deduplicated by tile centre (rounded to
	CENTRE_DECIMALS decimal places). Keep num_generations below about 10;
	the number of tiles grows by a factor of about golden ratio squared
	each generation.

	Attributes:
	  initial_side      The side length of the tiles in generation 0
	  generations       See tile_generations.TileGenerations
	"""

	def __init__(self, num_generations, initial_side=DEFAULT_INITIAL_SIDE,
	             centre=(0,0), print_progress=False):
		self.initial_side = initial_side
		super().__init__(num_generations, initial_tiles(initial_side, centre),
		                 print_progress)

	def _inflate_tile(self, tile):
		return tile.inflate_once()

	def _identity_key(self, tile):
		return tile_generations.rounded_point(tile.centre, CENTRE_DECIMALS)

	def show_plot(self, generation):
		"""
		Displays a matplotlib popup with the outline of every tile in the
		specified generation.
		"""
		tiles = self.get_generation(generation)
		logger.info(f"Number of tiles = {len(tiles)}")
		fig = plt.figure()
		ax = fig.add_subplot()
		ax.set_xlabel(r"x")
		ax.set_ylabel(r"y")
		ax.set_aspect("equal")
		for tile in tiles:
			# Close the outline by repeating the first vertex
			x, y = np.array(tile.vertices + tile.vertices[:1]).T
			ax.plot(x, y, linestyle="-", color="black", linewidth=0.5)
		plt.show()


def _rotate_2d(vector, angle):
	cos, sin = np.cos(angle), np.sin(angle)
	return np.array([cos*vector[0] - sin*vector[1], sin*vector[0] + cos*vector[1]])


def _read_only(array):
	array.setflags(write=False)
	return array
