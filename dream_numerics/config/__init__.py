################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Configuration and persistence for the numerics core."""

from __future__ import annotations

from dream_numerics.config.numerics_config import NumericsConfig
from dream_numerics.config.numerics_config import NumericsConfigError
from dream_numerics.config.numerics_params import CameraParams
from dream_numerics.config.numerics_params import NoiseParams
from dream_numerics.config.numerics_params import NumericsParams
from dream_numerics.config.numerics_params import NumericsParamsError
from dream_numerics.config.numerics_params import ToleranceParams


__all__ = [
    "CameraParams",
    "NoiseParams",
    "NumericsConfig",
    "NumericsConfigError",
    "NumericsParams",
    "NumericsParamsError",
    "ToleranceParams",
]
