"""OBD2 data sampler: consolidate, down-sample and chart vehicle diagnostic CSV logs"""

__version__ = "1.0.0"
