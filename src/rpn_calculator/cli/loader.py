"""Load batches of postfix expressions from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, FilePath

from rpn_calculator.common.logger import logger


class ExpressionFileLoader(BaseModel):
    """
    Read postfix expressions, one per line, from a file on disk.

    Supported inputs:
        - plain .txt files
        - .zip, .tar.xz and .7z archives, from which the first .txt member is read
    """

    model_config = ConfigDict(frozen=True)

    file_path: FilePath = Field(..., description="Path to the text file or archive")

    def read_lines(self) -> List[str]:
        """
        Return the non-blank lines of the input, unmodified.

        :return: Expression lines in file order
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if self.file_path.suffix == ".txt":
            content = self.file_path.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(self.file_path)

        lines = [line for line in content.splitlines() if line.strip()]
        logger.info("📄 Loaded %d expression(s) from %s", len(lines), self.file_path)
        return lines

    @staticmethod
    def _extract_archive(archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            if archive_path.suffix == ".zip":
                with zipfile.ZipFile(archive_path, "r") as zf:
                    txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError(f"No .txt file found in zip archive: {archive_path}")
                    zf.extract(txt_files[0], path=tmpdir_path)
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    txt_members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                    if not txt_members:
                        raise ValueError(f"No .txt file found in tar.xz archive: {archive_path}")
                    tf.extract(txt_members[0], path=tmpdir_path, filter="data")
                    return (tmpdir_path / txt_members[0].name).read_text(encoding="utf-8")

            elif archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError(f"No .txt file found in 7z archive: {archive_path}")
                    archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            raise ValueError(f"Unsupported input format: {''.join(archive_path.suffixes)}")
