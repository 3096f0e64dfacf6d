"""
Utils
=====
Geometry, projection and drawing helpers for Cross Pose Coach.
"""
