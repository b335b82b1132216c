[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskpipeline"
version = "1.0.0"
description = "Typed pipeline variables, condition and log expressions, and pluggable screen recognitions for automation pipelines"
requires-python = ">=3.10"
dependencies = []
keywords = ["automation", "pipeline", "recognition", "ocr", "template-matching", "variables"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["taskpipeline"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
