"""Package entry point for ``python -m srt_word_splitter``."""

from srt_word_splitter.cli import main

if __name__ == "__main__":
    main()
