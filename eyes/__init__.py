"""
Eyes - Webcam gaze marker.

A desktop application that detects eye landmarks in a live front-camera
feed and draws a marker at the matching point on screen.

Frames are processed in memory on this machine and nothing is saved, not
even the calibration center.

Architecture:
- Camera and landmark detector as injected collaborators
- Pure per-frame mapping core (eye anchor, calibration, screen mapping)
- Worker thread hands immutable results to the UI thread
"""

__version__ = "0.1.0"
__author__ = "Eyes Team"
__license__ = "MIT"
