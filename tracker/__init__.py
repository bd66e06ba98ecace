# -*- coding: utf-8 -*-
"""Personal workout and meal log: JSON stores plus session view-models."""

__version__ = "0.1.0"
