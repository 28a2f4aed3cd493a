[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tallerkit"
version = "0.1.0"
description = "BMP image handling, pixel filters, a bitmap diff tool and small string and arithmetic helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "bitmap", "image", "filters", "diff", "pixels"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tallerkit-filter = "tallerkit.cli:main"
tallerkit-bmpdiff = "tallerkit.bmpdiff:main"

[tool.hatch.build.targets.wheel]
packages = ["tallerkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
