# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""PixelCircuit — hand-drawn logic circuits from raster images.

Reconstructs wires and NOT gates from the bright pixels of an image and
steps the resulting circuit as a discrete simulation with randomised
gate delays.
"""

__version__ = "0.1.0"
__author__ = "Vasile Lucian Borbeleac"
__copyright__ = "© 2024-2026 FRAGMERGENT TECHNOLOGY S.R.L."
