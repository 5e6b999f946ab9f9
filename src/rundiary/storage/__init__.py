"""Storage module for the running diary.

Provides the save-file codec and whole-file load/save.
"""

from .codec import decode_runs, encode_run, encode_runs, read_runs, write_runs
from .diary_file import DEFAULT_SAVE_FILE, DiaryFile, load_diary, save_diary

__all__ = [
    "DEFAULT_SAVE_FILE",
    "DiaryFile",
    "decode_runs",
    "encode_run",
    "encode_runs",
    "load_diary",
    "read_runs",
    "save_diary",
    "write_runs",
]
