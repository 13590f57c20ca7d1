################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

import setuptools


PACKAGE_NAME: str = "dream_numerics"

setuptools.setup(
    name=PACKAGE_NAME,
    version="0.1.0",
    author="Garrett Brown",
    description=(
        "Fixed-dimension vector and matrix algebra for 3D transforms, "
        "cameras and procedural noise"
    ),
    license="Apache-2.0",
    zip_safe=True,
    keywords=[
        "linear algebra",
        "homogeneous coordinates",
        "3D transforms",
    ],
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Topic :: Multimedia :: Graphics :: 3D Rendering",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    python_requires=">=3.10",
    packages=setuptools.find_packages(exclude=["test", "test.*"]),
    install_requires=[
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
