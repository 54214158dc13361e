"""genesis — workspace scaffolding for premake-driven C/C++ projects."""

__version__ = "1.0.0"
