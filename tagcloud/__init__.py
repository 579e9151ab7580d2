"""
tagcloud - items on a rotatable 3D sphere, projected to 2D.
"""
from tagcloud.data_structures import CloudSettings, Placement, TagCloudItem
from tagcloud.distribution import FibonacciLattice
from tagcloud.layout import TagCloudScope, TagCloudItemScope, place, rescale
from tagcloud.state import TagCloudState
from tagcloud.tag_cloud import TagCloud
from tagcloud.utilities import (
    Quaternion, Vector3, IDENTITY, ZERO, rotate_vector_by_quaternion
)

__version__ = "1.0.0"
