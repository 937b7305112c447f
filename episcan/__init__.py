"""EpiScan - 뇌전증 시장 개요 집계"""

__version__ = "0.1.0"
