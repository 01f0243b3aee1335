"""TCP client sending RPN expression files to the server."""
from pathlib import Path
import socket
import tarfile
import tempfile
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress

from rpn_calculator.common.logger import logger


class ArithmeticClient(BaseModel):
    """
    TCP client sending RPN expressions to the server and receiving the results.

    The client:
    - reads expressions, one per line, from a plain text file or an archive
    - sends them over a TCP socket and signals end of input
    - writes the server's response into an output file
    """

    # Network configuration must not change during a transfer
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=9000, ge=1, le=65535, description="Server TCP port")

    def load_expressions(self, input_file: Path) -> str:
        """
        Read the raw expression lines from a text file or a supported archive.

        :param Path input_file: Path to a .txt file or an archive containing one

        :return: File content
        :rtype: str
        """
        if input_file.suffix == ".txt":
            return input_file.read_text(encoding="utf-8")
        return self._extract_archive(input_file)

    def send_file(self, input_file: Path, output_file: Path) -> None:
        """
        Send a file of RPN expressions to the server and write the results to an output file.

        :param Path input_file: Path to the input file or archive
        :param Path output_file: Path where results will be written

        :return: None
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        content: str = self.load_expressions(input_file)

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.connect((str(self.host), self.port))
            s.sendall(content.encode())
            # No more data will be sent
            s.shutdown(socket.SHUT_WR)
            logger.info(f"📤 Sent {input_file.name} to {self.host}:{self.port}")

            with output_file.open("w", encoding="utf-8") as f_out:
                while True:
                    # b"" means the server closed the connection
                    chunk = s.recv(4096)
                    if not chunk:
                        break
                    f_out.write(chunk.decode())
                    f_out.flush()

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        Supported formats:
        - .zip
        - .tar.xz
        - .7z

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
                        raise ValueError("📄❌ No .txt file found in zip archive")
                    return zf.read(txt_files[0]).decode("utf-8")

            elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                    if not members:
                        raise ValueError("📄❌ No .txt file found in tar.xz archive")
                    tf.extract(members[0], path=tmpdir_path, filter="data")
                    return (tmpdir_path / members[0].name).read_text(encoding="utf-8")

            elif archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in 7z archive")
                    archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            else:
                raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")
