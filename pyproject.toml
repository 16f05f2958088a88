[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apkc"
version = "0.1.0"
description = "Compile and bundle Android apps, and run them on a device, with the Android SDK tools directly"
requires-python = ">=3.10"
keywords = ["android", "apk", "aab", "aapt2", "d8", "adb", "build"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "packaging",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
apkc = "apkc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["apkc"]

[tool.pytest.ini_options]
addopts = "-ra"
