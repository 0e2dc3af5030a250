"""VoxelClash: a two-sided occupancy game on a 3x3x3 voxel grid."""

__version__ = "1.0.0"
