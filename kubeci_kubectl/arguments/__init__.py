"""kubectl argument assembly."""

from .assembler import assemble, tokenize

__all__ = ["assemble", "tokenize"]
