"""Rewrite nc.tcl copy commands and the Makefile SYSRTEMP setting to use local gold-file results."""

__version__ = "0.1.0"