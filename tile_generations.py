"""
Implements the generation model shared by the substitution tilings: an
array of generations, each derived from the previous one by inflating every
tile and discarding duplicates.
"""


import logging

import numpy as np


logger = logging.getLogger(__name__)


class GenerationNotFoundError(IndexError):
	"""
	Raised when a generation is requested which was never constructed.

	Attributes:
	  requested         The generation index which was requested
	  available         The number of generations which were constructed
	                    (so valid indices are 0 to available-1)
	"""

	def __init__(self, requested, available):
		self.requested, self.available = requested, available
		super().__init__(f"Generation {requested} not found "
		                 f"({available} generation(s) constructed)")


class TileGenerations:
	"""
	A template class for patterns grown by repeated inflation.

	Subclasses need to implement _inflate_tile(), which returns the list
	of tiles replacing a tile, and _identity_key(), which returns a
	hashable key such that two tiles with equal keys are considered to be
	the same physical tile.

	Attributes:
	  generations       A tuple containing one tuple of tiles per
	                    generation. Generation 0 contains the initial tiles
	                    (as given) and every later generation contains the
	                    deduplicated inflation of the previous one. Every
	                    stored tile is passed through _finalise_tile(),
	                    including the initial tiles themselves.
	"""

	def __init__(self, num_generations, initial_tiles, print_progress=False):
		"""
		Grows num_generations generations (including the initial one)
		from initial_tiles.

		If print_progress is True, the progress of each generation is
		printed to stdout as a percentage.
		"""
		if int(num_generations) != num_generations or num_generations < 1:
			raise ValueError(
				f"num_generations must be a positive integer, not {num_generations}")
		generations = [self._finalised(initial_tiles)]
		logger.info(f"{type(self).__name__}: generation 0 has {len(generations[0])} tiles")
		for i in range(1, int(num_generations)):
			if print_progress: print(f"Generation {i}:")
			generations.append(self._finalised(self._next_generation(generations[-1], print_progress)))
			logger.info(f"{type(self).__name__}: generation {i} has "
			            f"{len(generations[-1])} tiles")
		self.generations = tuple(generations)

	@property
	def num_generations(self):
		"""The number of generations which were constructed"""
		return len(self.generations)

	def _inflate_tile(self, tile):
		"""
		This should return a list of the tiles replacing tile in the next
		generation.
		"""
		raise NotImplementedError(f"The class {type(self).__name__} is a "
		                          f"subclass of tile_generations.TileGenerations "
		                          f"but lacks an _inflate_tile() method")

	def _identity_key(self, tile):
		"""
		This should return a hashable object identifying the physical
		position of tile, used to discard duplicates.
		"""
		raise NotImplementedError(f"The class {type(self).__name__} is a "
		                          f"subclass of tile_generations.TileGenerations "
		                          f"but lacks an _identity_key() method")

	def _finalise_tile(self, tile):
		"""
		Called on every tile as its generation is stored. Subclasses whose
		tiles can be moved should override this to stop them moving.
		"""
		pass

	def _finalised(self, tiles):
		tiles = tuple(tiles)
		for tile in tiles:
			self._finalise_tile(tile)
		return tiles

	def _next_generation(self, tiles, print_progress=False):
		"""
		Inflates every tile in tiles and returns the deduplicated list of
		the results.
		"""
		inflated_tiles = []
		for i, tile in enumerate(tiles):
			if print_progress: print(f"\r{100*i/len(tiles):.2f}%", end="")
			inflated_tiles.extend(self._inflate_tile(tile))
		if print_progress: print("\r100.00%")
		unique_tiles = deduplicate(inflated_tiles, self._identity_key)
		logger.info(f"Inflation gave {len(inflated_tiles)} tiles, "
		            f"{len(unique_tiles)} after removing duplicates")
		return unique_tiles

	def get_generation(self, generation):
		"""
		Returns a tuple of the tiles in the specified generation.

		Raises GenerationNotFoundError if generation is not in the range
		0 to num_generations-1.
		"""
		if not 0 <= generation < len(self.generations):
			raise GenerationNotFoundError(generation, len(self.generations))
		return self.generations[generation]

	def count_tiles(self, generation):
		"""
		Returns a dictionary of the number of tiles of each type in the
		specified generation

		The keys are type objects and the values are integers
		"""
		count_dict = {}
		for tile in self.get_generation(generation):
			if type(tile) in count_dict:
				count_dict[type(tile)] += 1
			else:
				count_dict[type(tile)] = 1
		return count_dict


def deduplicate(tiles, identity_key):
	"""
	Returns a list of tiles with duplicates removed, keeping the first
	occurrence of each.

	Two tiles are duplicates if identity_key (a callable taking a tile)
	returns equal values for them.
	"""
	seen_keys = set()
	unique_tiles = []
	for tile in tiles:
		key = identity_key(tile)
		if key not in seen_keys:
			seen_keys.add(key)
			unique_tiles.append(tile)
	return unique_tiles


def rounded_point(point, decimals):
	"""
	Returns the coordinates of point rounded to the specified number of
	decimal places, as a tuple of floats (so it can be used as a key).

	Negative zeros are normalised so that -0.0 and 0.0 give the same key.
	"""
	return tuple(float(x) + 0.0 for x in np.round(np.asarray(point, dtype=float), decimals))
