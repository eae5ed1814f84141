"""Merging of downloaded parts with ffmpeg."""

from __future__ import annotations

import os
import subprocess
from typing import Sequence


class MergeError(Exception):
    """ffmpeg failed to merge the parts."""


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass


def _run_merge_cmd(args: list[str], paths: Sequence[str], merge_file_path: str) -> None:
    try:
        result = subprocess.run(args, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    except OSError as exc:
        raise MergeError(f"{exc}\n") from exc
    if result.returncode != 0:
        stderr = result.stderr or b""
        if isinstance(stderr, bytes):
            stderr = stderr.decode("utf-8", errors="replace")
        raise MergeError(f"exit status {result.returncode}\n{stderr}")

    if merge_file_path:
        _remove_quietly(merge_file_path)
    for path in paths:
        _remove_quietly(path)


def merge_files_with_same_extension(paths: Sequence[str], merged_file_path: str) -> None:
    """Merge files of the same extension, or an audio and a video file, into one."""
    args = ["ffmpeg", "-y"]
    for path in paths:
        args.extend(["-i", path])
    args.extend(["-c:v", "copy", "-c:a", "copy", merged_file_path])
    _run_merge_cmd(args, paths, "")


def merge_to_mp4(paths: Sequence[str], merged_file_path: str, filename: str) -> None:
    """Concatenate video parts into an MP4 file."""
    merge_file_path = filename + ".txt"
    with open(merge_file_path, "w", encoding="utf-8") as merge_file:
        for path in paths:
            merge_file.write(f"file '{path}'\n")

    args = [
        "ffmpeg", "-y", "-f", "concat", "-safe", "-1",
        "-i", merge_file_path, "-c", "copy", "-bsf:a", "aac_adtstoasc", merged_file_path,
    ]
    _run_merge_cmd(args, paths, merge_file_path)