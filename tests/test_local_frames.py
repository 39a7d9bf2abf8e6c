import numpy as np
import pytest

from local_frames import Frame, norm, normalise, rotate_vector


def _tilted_frame():
	return Frame((3, -2, 5), (1, 2, 2), (0, 1, -1))


def test_world_and_local_are_inverse():
	frame = _tilted_frame()
	points = np.array([[0, 0, 0], [1, 2, 3], [-4.5, 0.25, 10]])

	assert np.allclose(frame.to_world(frame.to_local(points)), points)
	assert np.allclose(frame.to_local(frame.to_world(points)), points)


def test_basis_is_orthonormal_and_right_handed():
	frame = _tilted_frame()

	assert np.allclose(frame.basis @ frame.basis.T, np.eye(3))
	assert np.allclose(frame.local_y, np.cross(frame.local_z, frame.local_x))
	assert np.isclose(np.linalg.det(frame.basis), 1)


def test_default_frame_matches_world_axes():
	frame = Frame()

	assert np.allclose(frame.basis, np.eye(3))
	assert np.allclose(frame.to_local((1, 2, 3)), (1, 2, 3))


def test_local_x_is_made_perpendicular():
	frame = Frame((0, 0, 0), (0, 0, 2), (1, 0, 1))

	assert np.allclose(frame.local_x, (1, 0, 0))
	assert np.allclose(frame.local_z, (0, 0, 1))


def test_parallel_axes_raise():
	with pytest.raises(ValueError):
		Frame((0, 0, 0), (0, 0, 1), (0, 0, -3))


def test_origin_maps_to_zero():
	frame = _tilted_frame()

	assert np.allclose(frame.to_local(frame.origin), 0)
	assert np.allclose(frame.to_world((0, 0, 0)), frame.origin)


def test_rotated_about_local_z():
	frame = Frame().rotated(np.pi/2, (0, 0, 1))

	assert np.allclose(frame.local_x, (0, 1, 0))
	assert np.allclose(frame.local_y, (-1, 0, 0))
	assert np.allclose(frame.local_z, (0, 0, 1))


def test_translated_keeps_axes():
	frame = _tilted_frame()
	moved = frame.translated((1, 1, 1))

	assert np.allclose(moved.origin, frame.origin + 1)
	assert np.allclose(moved.basis, frame.basis)


def test_inverted_z_turns_about_x():
	frame = _tilted_frame()
	inverted = frame.inverted(invert_z=True)

	assert np.allclose(inverted.local_x, frame.local_x)
	assert np.allclose(inverted.local_y, -frame.local_y)
	assert np.allclose(inverted.local_z, -frame.local_z)


def test_inverted_both_turns_about_y():
	frame = _tilted_frame()
	inverted = frame.inverted(True, True)

	assert np.allclose(inverted.local_x, -frame.local_x)
	assert np.allclose(inverted.local_y, frame.local_y)
	assert np.allclose(inverted.local_z, -frame.local_z)


def test_inverted_returns_new_frame():
	frame = _tilted_frame()
	before = frame.basis.copy()
	frame.inverted(True, True)

	assert np.array_equal(frame.basis, before)


def test_vector_helpers():
	assert norm(np.array([3, 4, 0])) == 5
	assert np.allclose(normalise((0, 0, 7)), (0, 0, 1))
	assert np.allclose(rotate_vector((1, 0, 0), np.pi/2), (0, 1, 0))
	assert np.allclose(rotate_vector((2, 0, 0), np.pi, pivot=(1, 0, 0)), (0, 0, 0))
	with pytest.raises(ValueError):
		normalise((0, 0, 0))
