"""glslopt-build: static archive builder for the vendored glsl-optimizer sources.

Produces ``libglcpp.a``, ``libmesa.a`` and ``libglsl_optimizer.a`` for a parent
Cargo build, either through the setuptools native compiler layer or through a
manually driven 32-bit host toolchain for legacy i686 cross builds.
"""

__version__ = "0.1.0"
