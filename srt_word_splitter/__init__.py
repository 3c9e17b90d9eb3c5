"""SRT Word Splitter — sentence-level subtitles to one cue per word.

WHY: Word-by-word captions (karaoke-style or kinetic text) need a timing
for every word, but ordinary subtitle files only time whole sentences.
This package cuts each sentence's time span into a gapless chain of word
intervals that add up exactly to the original span.

HOW: Four-stage pipeline — read (srt library), segment (jieba), allocate
(proportional time split, batch renumbering, smoothing), format (word-level
SRT or JSON). Each stage is independently testable.

RULES:
- Timecode arithmetic is done on integer milliseconds
- The allocator and segmenter are explicit objects, never globals
- Adding an output format = one new formatter module, no core changes
"""

__version__ = "1.0.0"
