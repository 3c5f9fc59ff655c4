from .vixsrc_stream import VixSrcStreamUseCase, assemble_descriptor

__all__ = ["VixSrcStreamUseCase", "assemble_descriptor"]
