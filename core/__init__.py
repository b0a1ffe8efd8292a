"""
Core conversion engine.

Holds the dialect-independent canonical model, the adapter interfaces every
dialect implements, the format registry, the conversion orchestrator and the
loss assessor that scores each conversion.
"""
