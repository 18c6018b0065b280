from .chat import ReplyAccumulator, append_message, error_reply, replace_last, stream_reply
from .project_file import (
    ProjectSet,
    dump_project_set,
    export_filename,
    parse_project_set,
    read_project_set,
    write_project_set,
)
from .timeline import TIMELINE_RESPONSE_SCHEMA, parse_timeline

__all__ = [
    "ReplyAccumulator",
    "append_message",
    "error_reply",
    "replace_last",
    "stream_reply",
    "ProjectSet",
    "dump_project_set",
    "export_filename",
    "parse_project_set",
    "read_project_set",
    "write_project_set",
    "TIMELINE_RESPONSE_SCHEMA",
    "parse_timeline",
]
