# -*- coding: utf-8 -*-
"""Diet domain (meals, food catalog with per-portion macros).

Models and storage mirror the workout domain; macro scaling lives in
`tracker/diet/macros.py`.
"""
