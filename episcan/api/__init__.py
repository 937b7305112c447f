"""EpiScan API"""
