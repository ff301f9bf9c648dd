[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgtoy"
version = "0.1.0"
description = "Randomised image effect settings, palettes and dither patterns resolved from configuration data."
requires-python = ">=3.10"
keywords = [
    "image",
    "effects",
    "dithering",
    "palette",
    "glitch",
    "generative",
    "configuration",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Artistic Software",
]
dependencies = [
    "pillow",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["imgtoy"]

[tool.pytest.ini_options]
addopts = "-ra"
