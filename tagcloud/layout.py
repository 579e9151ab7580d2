#!/usr/bin/env python3
"""
Module layout.py
Item registry and projection of rotated items to 2D placements.

Pipeline per item:
  1. static coordinates (registered, or taken from the Fibonacci lattice
     with an optional layer scale and per-item rotation)
  2. rotated by the cloud rotation
  3. projected:  offset = radius * (1 + x, 1 - y) - size / 2,  depth = z
"""
from typing import Any, Callable, List, Optional, Sequence, Tuple

from tagcloud.data_structures import Placement, TagCloudItem
from tagcloud.distribution import FibonacciLattice
from tagcloud.utilities import (
    Quaternion, Vector3, IDENTITY, rotate_vector_by_quaternion
)

# Layer of an item lying on the sphere surface.
DEFAULT_LAYER = 1.0

Size = Tuple[int, int]


def place(coordinates: Vector3, radius: float,
          width: int = 0, height: int = 0) -> Tuple[int, int, float]:
    """
    Offset of an item of the given size inside the cloud bounds plus its depth.
    Offsets are truncated toward zero.
    """
    x = radius * (1 + coordinates.x) - width // 2
    y = radius * (1 - coordinates.y) - height // 2
    return int(x), int(y), coordinates.z


def rescale(value: float, new_min: float, new_max: float) -> float:
    """Map value from [-1, 1] linearly onto [new_min, new_max]."""
    return (((value + 1) * (new_max - new_min)) / 2) + new_min


class TagCloudItemScope:
    """
    What an item's renderer knows about the item: its current (rotated)
    coordinates. Helpers derive visual effects from the depth.
    """

    def __init__(self, coordinates: Vector3):
        self.coordinates = coordinates

    def fade(self, to_alpha: float = 0.25) -> float:
        """Alpha for the item; the farthest items get `to_alpha`."""
        return rescale(self.coordinates.z, to_alpha, 1.0)

    def scale_down(self, to_scale: float = 0.5) -> float:
        """Scale for the item; the farthest items get `to_scale`."""
        return rescale(self.coordinates.z, to_scale, 1.0)


class TagCloudScope:
    """
    Registry of the cloud items.

    Items are registered with explicit coordinates (item / items /
    items_indexed) or spread uniformly over the sphere (distribute /
    distribute_indexed). Registration order is the item index.
    """

    def __init__(self):
        self._items: List[TagCloudItem] = []

    @property
    def registered(self) -> List[TagCloudItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def clear(self):
        self._items = []

    def item(self, coordinates: Vector3, content: Any = None):
        self._items.append(TagCloudItem(coordinates, content))

    def items(self, coordinates: Sequence[Vector3],
              content: Optional[Callable[[Vector3], Any]] = None):
        self.items_indexed(
            coordinates,
            None if content is None else (lambda _, c: content(c)),
        )

    def items_indexed(self, coordinates: Sequence[Vector3],
                      content: Optional[Callable[[int, Vector3], Any]] = None):
        for index, item_coordinates in enumerate(coordinates):
            item_content = None if content is None else content(index, item_coordinates)
            self._items.append(TagCloudItem(item_coordinates, item_content))

    def distribute(self, values: Sequence[Any],
                   content: Optional[Callable[[Any], Any]] = None,
                   layer: Optional[Callable[[Any], float]] = None,
                   rotation: Optional[Callable[[Any], Quaternion]] = None):
        """
        Spread values uniformly over the sphere.

        Args:
          values: one entry per item
          content: maps a value to the item content (default: the value)
          layer: how deep the item sits, 1.0 is the sphere surface
          rotation: initial rotation of the item
        """
        self.distribute_indexed(
            values,
            None if content is None else (lambda _, v: content(v)),
            None if layer is None else (lambda _, v: layer(v)),
            None if rotation is None else (lambda _, v: rotation(v)),
        )

    def distribute_indexed(self, values: Sequence[Any],
                           content: Optional[Callable[[int, Any], Any]] = None,
                           layer: Optional[Callable[[int, Any], float]] = None,
                           rotation: Optional[Callable[[int, Any], Quaternion]] = None):
        if len(values) == 0:
            return
        lattice = FibonacciLattice(len(values))
        for index, value in enumerate(values):
            coordinates = lattice.item(index)

            item_layer = DEFAULT_LAYER if layer is None else layer(index, value)
            if item_layer != DEFAULT_LAYER:
                coordinates = coordinates.scale(item_layer)

            item_rotation = IDENTITY if rotation is None else rotation(index, value)
            if item_rotation != IDENTITY:
                coordinates = rotate_vector_by_quaternion(coordinates, item_rotation)

            item_content = value if content is None else content(index, value)
            self._items.append(TagCloudItem(coordinates, item_content))


def layout_items(items: Sequence[TagCloudItem], rotation: Quaternion, radius: float,
                 sizes: Optional[Sequence[Size]] = None) -> List[Placement]:
    """
    Rotate and project every item. Placements keep the registration order.

    sizes: (width, height) of each item in pixels; items are treated as
    points when omitted.
    """
    placements = []
    for index, item in enumerate(items):
        width, height = sizes[index] if sizes is not None else (0, 0)
        coordinates = rotate_vector_by_quaternion(item.coordinates, rotation)
        offset_x, offset_y, depth = place(coordinates, radius, width, height)
        placements.append(Placement(index, item, coordinates, offset_x, offset_y, depth))
    return placements


def draw_order(placements: Sequence[Placement]) -> List[Placement]:
    """Back to front: lowest depth first. Ties keep registration order."""
    return sorted(placements, key=lambda p: p.depth)
