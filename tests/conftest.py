"""Pytest configuration and fixtures for swf_workload tests."""

import gzip
import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

SWF_HEADER = """; Version: 2.2
; Computer: Test cluster
; MaxProcs: 64
;
"""


def swf_line(
    job_id: int | str = 1,
    submit: int | str = 0,
    run_time: int | str = 100,
    used_procs: int | str = 1,
    requested_procs: int | str = 1,
    requested_time: int | str = -1,
    user: int | str = -1,
    group: int | str = -1,
) -> str:
    """Build one 18-field Standard Workload Format data line."""
    fields = [
        job_id,  # 0 job number
        submit,  # 1 submit time
        -1,  # 2 wait time
        run_time,  # 3 run time
        used_procs,  # 4 allocated processors
        -1,  # 5 average CPU time
        -1,  # 6 used memory
        requested_procs,  # 7 requested processors
        requested_time,  # 8 requested time
        -1,  # 9 requested memory
        1,  # 10 status
        user,  # 11 user id
        group,  # 12 group id
        -1,  # 13 executable
        -1,  # 14 queue
        -1,  # 15 partition
        -1,  # 16 preceding job
        -1,  # 17 think time
    ]
    return "  ".join(str(f) for f in fields)


def build_trace(lines: list[str], header: bool = True) -> str:
    """Join data lines into trace text, optionally with a comment header."""
    body = "\n".join(lines) + "\n"
    return (SWF_HEADER if header else "") + body


def gzip_bytes(text: str) -> bytes:
    return gzip.compress(text.encode("utf-8"))


def zip_bytes(text: str, entry: str = "trace.swf", extra: dict[str, str] | None = None) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(entry, text)
        for name, content in (extra or {}).items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def sample_trace() -> str:
    """Trace with a header, three jobs and one short line."""
    return build_trace(
        [
            swf_line(1, submit=0, run_time=120, used_procs=4, requested_procs=4, user=3),
            swf_line(2, submit=15, run_time=0, used_procs=2, requested_procs=2, user=5),
            "3 40 0",
            swf_line(4, submit=55, run_time=45, used_procs=1, requested_procs=-1, user=7),
        ]
    )


@pytest.fixture
def write_trace(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing trace text to a raw, gzip or zip file under tmp_path."""

    def _write(text: str, name: str = "trace.swf", compression: str = "raw") -> Path:
        path = tmp_path / name
        if compression == "gzip":
            path.write_bytes(gzip_bytes(text))
        elif compression == "zip":
            path.write_bytes(zip_bytes(text))
        else:
            path.write_text(text)
        return path

    return _write
