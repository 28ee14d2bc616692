"""Archive and output-file helpers shared by tests"""

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Dict


def make_tar_xz(files: Dict[str, bytes]) -> bytes:
    """Build a .tar.xz archive in memory"""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:xz") as tf:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def make_zip(files: Dict[str, bytes]) -> bytes:
    """Build a .zip archive in memory"""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def read_outputs(path: Path) -> Dict[str, str]:
    """Parse a GITHUB_OUTPUT file written with heredoc delimiters"""
    outputs = {}
    lines = path.read_text().splitlines()
    i = 0
    while i < len(lines):
        name, delimiter = lines[i].split("<<", 1)
        end = lines.index(delimiter, i + 1)
        outputs[name] = "\n".join(lines[i + 1:end])
        i = end + 1
    return outputs
