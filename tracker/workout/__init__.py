# -*- coding: utf-8 -*-
"""Workout domain (exercise sessions and the exercise name catalog)."""
