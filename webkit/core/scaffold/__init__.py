"""Scaffolding engine — write options, notice banners and the Generator."""

from webkit.core.scaffold.generator import (
    Generator,
    Notifier,
    NullNotifier,
    RecordingNotifier,
    encode_json,
    encode_yaml,
)
from webkit.core.scaffold.notice import NOTICE, notice_for_file
from webkit.core.scaffold.options import (
    WriteMode,
    WriteOptions,
    with_notice,
    with_scaffold_mode,
    with_tracking,
    without_notice,
)

__all__ = [
    "NOTICE",
    "Generator",
    "Notifier",
    "NullNotifier",
    "RecordingNotifier",
    "WriteMode",
    "WriteOptions",
    "encode_json",
    "encode_yaml",
    "notice_for_file",
    "with_notice",
    "with_scaffold_mode",
    "with_tracking",
    "without_notice",
]
