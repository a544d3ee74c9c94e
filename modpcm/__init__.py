"""Amiga tracker module -> signed 8-bit mono PCM."""
from .loader import load,parse,sniff_layout
from .mixer import render
from .song import MalformedModule,Song

__version__='0.1.0'
