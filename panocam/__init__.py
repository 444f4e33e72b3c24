#!/usr/bin/env python3
"""
panocam - drag and arrow-key camera control for 360 video players

Maps pointer drags and arrow key presses onto yaw/pitch camera angles with
circular (yaw) and clamped (pitch) range semantics.
"""

__version__ = '0.1.0'
