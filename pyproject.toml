[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marketcore"
version = "0.1.0"
description = "Business rules for a multi-vendor marketplace: commissions, order splitting, promotions, product and vendor rules, and a JSON-backed product catalogue."
requires-python = ">=3.10"
dependencies = [
    "bcrypt",
]
keywords = [
    "ecommerce",
    "marketplace",
    "multi-vendor",
    "commission",
    "orders",
    "promotions",
    "catalogue",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["marketcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
