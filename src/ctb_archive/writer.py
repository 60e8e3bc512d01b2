"""Writer for images and attachments extracted from node content."""

from pathlib import Path

from loguru import logger

from ctb_archive.errors import BinaryExportError


class BinaryWriter:
    """Write extracted binaries into one output directory.

    - The directory is created on first write; an existing directory is fine.
    - Files whose contents are already identical are not rewritten, so the
      mtime/inode of unchanged exports is stable across runs.
    """

    def __init__(self, outdir: str | Path) -> None:
        self.outdir = Path(outdir).expanduser().resolve()
        self._ready = False

    def _ensure_outdir(self) -> None:
        if self._ready:
            return
        try:
            self.outdir.mkdir(parents=True, exist_ok=True)
            if not self.outdir.is_dir():
                msg = f"Output path {str(self.outdir)!r} is not a directory"
                raise BinaryExportError(msg)
        except OSError as e:
            msg = f"Cannot create output directory {str(self.outdir)!r}: {e}"
            raise BinaryExportError(msg) from e
        self._ready = True

    def write(self, fname: str, data: bytes) -> str:
        """Write data to ``outdir/fname`` and return the absolute path.

        Raises:
            ValueError: fname is absolute or escapes the output directory.
            BinaryExportError: the directory or file cannot be written.
        """
        if Path(fname).is_absolute():
            msg = f"must be relative: {fname!r}"
            raise ValueError(msg)
        path = self.outdir / fname
        if not str(path.resolve()).startswith(str(self.outdir) + "/"):
            msg = f"Path escapes outdir: {str(path)!r}"
            raise ValueError(msg)

        self._ensure_outdir()
        try:
            if path.is_file() and path.read_bytes() == data:
                logger.debug("Unchanged {}", path)
                return str(path)
            logger.debug("Writing {} ({} bytes)", path, len(data))
            path.write_bytes(data)
        except OSError as e:
            msg = f"Cannot write {str(path)!r}: {e}"
            raise BinaryExportError(msg) from e
        return str(path)
