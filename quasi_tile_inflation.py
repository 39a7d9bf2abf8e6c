"""
Implements the substitution rules for the icosahedral quasi-crystal: each
rhombic face is replaced by a fixed arrangement of smaller quasi-tiles,
built by substituting each of its four edges.

The rules follow "Substitution rules for icosahedral quasicrystals"
(https://www.researchgate.net/publication/269776178).
"""


import logging

import numpy as np

from local_frames import Frame, norm, normalise, rotate_vector
from icosahedral_faces import Connector
from quasi_tiles import ProlateRhombohedron, RhombicIcosahedron, RhombicTriacontahedron


logger = logging.getLogger(__name__)

PRIMARY = "primary"
SECONDARY = "secondary"

# For each connector type, the edge substitutions making up the face, as
# (pattern, start vertex index, end vertex index, phase in units of pi/5)
INFLATION_RULES = {
	Connector.LINE: (
		(PRIMARY, 0, 1, 0),
		(PRIMARY, 0, 3, 1),
		(PRIMARY, 2, 1, 1),
		(PRIMARY, 2, 3, 0),
	),
	Connector.TRIANGLE: (
		(SECONDARY, 2, 3, 1),
		(SECONDARY, 2, 1, 2),
		(PRIMARY, 0, 3, 1),
		(PRIMARY, 0, 1, 0),
	),
	Connector.ARROW: (
		(SECONDARY, 2, 3, 1),
		(SECONDARY, 0, 3, 2),
		(PRIMARY, 2, 1, 1),
		(PRIMARY, 0, 1, 0),
	),
}


class UnsupportedConnectorError(ValueError):
	"""Raised when inflating a face whose connector has no substitution rule"""


def inflate_face(face):
	"""
	Returns the list of quasi-tiles which replace face in the next
	generation, in a fixed order.

	The result depends only on the face's connector and vertices.
	"""
	try:
		rules = INFLATION_RULES[face.connector]
	except KeyError:
		raise UnsupportedConnectorError(
			f"No inflation rule for connector {face.connector!r}") from None
	tiles = []
	for pattern, start, end, phase in rules:
		tiles.extend(_substitute_edge(pattern, face.vertices[start], face.vertices[end],
		                              face.normal, phase * np.pi/5))
	logger.debug(f"Inflated {face.connector.name} face into {len(tiles)} tiles")
	return tiles


def _ring():
	"""
	Returns 5 prolate rhombohedra attached around a shared edge.

	Each tile's face 0 is attached to the previous one's face 1, except the
	last which closes the ring from the other side of the first.
	"""
	ring = [ProlateRhombohedron() for _ in range(5)]
	for i in range(1, 4):
		ring[i].attach_to(0, ring[i-1], 1)
	ring[4].attach_to(1, ring[0], 0)
	return ring


def _primary_chain():
	"""
	Returns the 11 tiles substituting a primary edge, along with the start
	and end points of the edge they span and a reference direction fixing
	their rotation about it.
	"""
	ring = _ring()
	mid = RhombicIcosahedron()
	mid.attach_to(17, ring[1], 4, alternate=True)
	radial = [ProlateRhombohedron() for _ in range(5)]
	for i, tile in enumerate(radial):
		tile.attach_to(2, mid, i)

	start = ring[0].faces[2].vertices[2]
	end = radial[-1].faces[4].vertices[0]
	reference = mid.faces[-1].vertices[1] - mid.faces[-1].vertices[0]
	return ring + [mid] + radial, start, end, reference


def _secondary_chain():
	"""As _primary_chain(), but for the 6 tiles substituting a secondary edge"""
	ring = _ring()
	mid = RhombicTriacontahedron()
	mid.attach_to(17, ring[1], 4, alternate=True)

	start = ring[0].faces[2].vertices[2]
	end = mid.faces[4].vertices[0]
	reference = mid.faces[2].vertices[1] - mid.faces[2].vertices[0]
	return ring + [mid], start, end, reference


def _substitute_edge(pattern, edge_start, edge_end, face_normal, phase):
	"""
	Builds the chain of tiles for pattern and moves it (with a similarity
	transform) so that it spans the edge from edge_start to edge_end.

	phase rotates the chain about the edge, relative to face_normal.
	"""
	if pattern == PRIMARY:
		tiles, start, end, reference = _primary_chain()
	elif pattern == SECONDARY:
		tiles, start, end, reference = _secondary_chain()
	else:
		raise ValueError(f"The edge pattern '{pattern}' is not supported")

	target_frame = Frame(edge_start, edge_end - edge_start, face_normal)

	chain_z = normalise(end - start)
	chain_x = np.cross(np.cross(chain_z, normalise(reference)), chain_z)
	chain_x = rotate_vector(chain_x, phase + np.pi/10, chain_z)
	chain_frame = Frame(start, chain_z, chain_x)

	scale = norm(edge_end - edge_start) / norm(end - start)
	for tile in tiles:
		tile.apply_transform(
			lambda points: target_frame.to_world(scale * chain_frame.to_local(points)))
	return tiles
