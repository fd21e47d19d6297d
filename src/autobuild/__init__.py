"""
Top-level package for the autobuild project.

The build orchestration lives under `autobuild.build_runner`; the console
script `autobuild` maps to `autobuild.build_runner.cli:main`.
"""

__all__: list[str] = []
