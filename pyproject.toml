[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xdgkit"
version = "0.1.0"
description = "Freedesktop icon theme lookup, GTK icon cache reading and a MIME type command-line tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["xdg", "freedesktop", "icon-theme", "icon-theme.cache", "mimetype", "desktop"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xdgkit-iconfinder = "xdgkit.iconfinder:main"
xdgkit-mat = "xdgkit.mat:main"

[tool.hatch.build.targets.wheel]
packages = ["xdgkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
