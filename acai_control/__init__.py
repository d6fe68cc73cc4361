"""Açaí Control - ponto de venda e retaguarda para banca de açaí e farinhas."""

__version__ = "1.0.0"
