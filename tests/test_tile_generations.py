import math

import pytest

import tile_generations
from tile_generations import GenerationNotFoundError, TileGenerations


class Doubling(TileGenerations):
	"""Each integer tile n inflates to n and n+1"""

	def _inflate_tile(self, tile):
		return [tile, tile + 1]

	def _identity_key(self, tile):
		return tile


def test_generations_are_grown_and_deduplicated():
	doubling = Doubling(4, [0])

	assert doubling.generations == ((0,), (0, 1), (0, 1, 2), (0, 1, 2, 3))
	assert doubling.num_generations == 4
	assert doubling.get_generation(2) == (0, 1, 2)
	assert doubling.count_tiles(3) == {int: 4}


def test_initial_tiles_are_kept_as_given():
	doubling = Doubling(1, [5, 5])

	assert doubling.get_generation(0) == (5, 5)


def test_invalid_generation_counts():
	for num_generations in (0, -1, 1.5):
		with pytest.raises(ValueError):
			Doubling(num_generations, [0])


def test_missing_generation():
	with pytest.raises(GenerationNotFoundError) as error:
		Doubling(2, [0]).get_generation(5)
	assert (error.value.requested, error.value.available) == (5, 2)


def test_base_class_requires_hooks():
	with pytest.raises(NotImplementedError):
		TileGenerations(2, [0])


def test_deduplicate_keeps_first_occurrence():
	tiles = [("a", 1), ("b", 2), ("c", 1), ("d", 3), ("e", 2)]

	unique = tile_generations.deduplicate(tiles, lambda tile: tile[1])

	assert unique == [("a", 1), ("b", 2), ("d", 3)]


def test_rounded_point_normalises_negative_zero():
	key = tile_generations.rounded_point((-0.0001, 1.23456), 2)

	assert key == (0.0, 1.23)
	assert math.copysign(1, key[0]) == 1
	assert hash(key) == hash((0.0, 1.23))
