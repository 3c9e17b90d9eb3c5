"""Core timing model: IR, timecodes, allocation, segmentation and SRT I/O.

WHY: The core package holds the parts every caller depends on — the
record types, the millisecond timecode arithmetic and the allocator.
These must stay free of CLI and output-format concerns.

HOW: ir.py defines the data structures, timecode.py the codec and
interval arithmetic, allocator.py the time distribution and smoothing,
segmenter.py the word cutting, subtitles.py the SRT container.

RULES:
- IR dataclasses are the contract — change with care
- Nothing in core/ writes to stdout or configures logging
"""
