import numpy as np
import pytest

import quasicrystal
import tile_generations
from local_frames import Frame
from icosahedral_faces import Connector, IcosahedralFace
from quasi_tiles import FrozenTileError, ProlateRhombohedron, RhombicTriacontahedron
from quasicrystal import Beam, FacePreview, QuasiCrystal


def test_first_preset():
	tiles = quasicrystal.first_generation_tiles()

	assert len(tiles) == 20
	assert all(isinstance(tile, ProlateRhombohedron) for tile in tiles)
	keys = {tile_generations.rounded_point(tile.rounded_centre, 4) for tile in tiles}
	assert len(keys) == 20


def test_first_preset_rows_are_attached():
	tiles = quasicrystal.first_generation_tiles()

	# Second row tile 0 sits on face 2 of first row tile 0
	assert np.allclose(tiles[5].faces[0].centre, tiles[0].faces[2].centre)
	# Third row on face 1 of the second row
	assert np.allclose(tiles[12].faces[0].centre, tiles[7].faces[1].centre)


def test_second_preset():
	first_tiles = quasicrystal.first_generation_tiles()
	tiles = quasicrystal.second_generation_tiles()

	assert len(tiles) == 12
	assert all(isinstance(tile, RhombicTriacontahedron) for tile in tiles)
	assert np.allclose(tiles[0].faces[1].centre, first_tiles[0].faces[4].centre)
	assert np.allclose(tiles[11].faces[1].centre, first_tiles[19].faces[3].centre)


def test_new_quasicrystal():
	crystal = quasicrystal.new_quasicrystal(1, seed="first")

	assert crystal.count_tiles(0) == {ProlateRhombohedron: 20}
	with pytest.raises(tile_generations.GenerationNotFoundError):
		crystal.get_generation(1)


def test_unknown_seed():
	with pytest.raises(ValueError):
		quasicrystal.new_quasicrystal(1, seed="third")


def test_invalid_sizes():
	with pytest.raises(ValueError):
		quasicrystal.first_generation_tiles(face_side=-5)
	with pytest.raises(ValueError):
		QuasiCrystal(0, [ProlateRhombohedron()])


def test_crystal_from_face():
	face = IcosahedralFace(connector=Connector.TRIANGLE)
	crystal = quasicrystal.crystal_from_face(1, face)

	assert len(crystal.get_generation(0)) == 34


def test_next_generation_is_deduplicated():
	crystal = QuasiCrystal(2, [ProlateRhombohedron(Frame(), 50)])
	tiles = crystal.get_generation(1)

	# 3 TRIANGLE faces and 3 LINE faces
	assert 0 < len(tiles) <= 3*34 + 3*44
	keys = [tile_generations.rounded_point(tile.rounded_centre, 4) for tile in tiles]
	assert len(set(keys)) == len(tiles)


def test_wireframe():
	tile = ProlateRhombohedron()
	crystal = QuasiCrystal(1, [tile])

	beams = crystal.wireframe(0, 1.5)

	assert len(beams) == 24
	assert all(isinstance(beam, Beam) for beam in beams)
	assert all(beam.radius_a == beam.radius_b == 1.5 for beam in beams)
	assert np.allclose(beams[0].point_a, tile.faces[0].vertices[0])
	assert np.allclose(beams[0].point_b, tile.faces[0].vertices[1])
	assert np.allclose(beams[3].point_b, tile.faces[0].vertices[0])


def test_wireframe_rejects_non_positive_radius():
	crystal = QuasiCrystal(1, [ProlateRhombohedron()])

	with pytest.raises(ValueError):
		crystal.wireframe(0, 0)


def test_show_plot(no_popups, caplog):
	crystal = QuasiCrystal(1, [ProlateRhombohedron(), RhombicTriacontahedron(Frame((60, 0, 0)))])
	with caplog.at_level("INFO"):
		crystal.show_plot(0, show_axes=True, face_preview=FacePreview.CONNECTOR)

	assert len(no_popups) == 1
	assert "Number of tiles = 2" in caplog.text


def test_generations_are_frozen():
	first, second = ProlateRhombohedron(), ProlateRhombohedron(Frame((60, 0, 0)))
	crystal = QuasiCrystal(2, [first, second])
	centre = first.rounded_centre.copy()

	with pytest.raises(FrozenTileError):
		first.attach_to(0, second, 1)
	assert np.array_equal(crystal.get_generation(0)[0].rounded_centre, centre)
	assert all(tile.frozen for tile in crystal.get_generation(1))


def test_whole_generation_is_deterministic():
	crystals = [QuasiCrystal(2, [ProlateRhombohedron(Frame(), 50)]) for _ in range(2)]
	tiles_1, tiles_2 = (crystal.get_generation(1) for crystal in crystals)

	assert len(tiles_1) == len(tiles_2)
	for tile_1, tile_2 in zip(tiles_1, tiles_2):
		assert type(tile_1) is type(tile_2)
		assert np.array_equal(tile_1.rounded_centre, tile_2.rounded_centre)
		for face_1, face_2 in zip(tile_1.faces, tile_2.faces):
			assert np.array_equal(face_1.vertices, face_2.vertices)


def test_beams_can_be_compared_and_hashed():
	tile = ProlateRhombohedron()
	beams = QuasiCrystal(1, [tile]).wireframe(0, 1)

	copy = Beam(np.array(beams[0].point_a), 1, list(beams[0].point_b), 1.0)
	assert copy == beams[0]
	assert hash(copy) == hash(beams[0])
	assert isinstance(beams[0].point_a, tuple)
	# 12 edges, each shared by two faces
	assert 12 <= len(set(beams)) <= 24


def test_face_preview_lines():
	tiles = [ProlateRhombohedron()]

	assert quasicrystal.face_preview_lines(tiles, FacePreview.NONE) == []

	axis_lines = quasicrystal.face_preview_lines(tiles, FacePreview.AXIS)
	assert [colour for _, colour in axis_lines] == ["green", "red"]
	assert all(len(segments) == 6 for segments, _ in axis_lines)

	connector_lines = dict((colour, segments) for segments, colour in
	                       quasicrystal.face_preview_lines(tiles, "connector"))
	# 3 TRIANGLE faces with 3 segments each and 3 LINE faces with 1
	assert len(connector_lines["darkorange"]) == 9
	assert len(connector_lines["blue"]) == 3
	# No ARROW faces, so red is only the short axes
	assert len(connector_lines["red"]) == 6
	assert np.allclose(connector_lines["blue"][0][0],
	                   tiles[0].faces[3].vertices[0]
	                   + 0.2 * (tiles[0].faces[3].vertices[2] - tiles[0].faces[3].vertices[0]))
