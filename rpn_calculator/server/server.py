"""TCP server that evaluates RPN expressions using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
import socket
from typing import List, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress

from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import OperationRequest, OperationResult
from rpn_calculator.server.worker import WorkerProcess

ActiveWorker = Tuple[Process, Connection]


class ArithmeticServer(BaseModel):
    """
    TCP socket server evaluating RPN expressions sent by a client.

    Features:
        - Spawns one worker process per expression.
        - Writes results to disk as soon as a worker finishes.
        - Keeps at most one active worker per CPU core.
    """

    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(arbitrary_types_allowed=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=9000, ge=1, le=65535, description="Server TCP port")
    output_file: Path = Field(..., description="Path to write computation results")
    strict: bool = Field(default=True, description="Reject expressions leaving more than one operand")

    def _receive_data(self, conn: socket.socket) -> List[OperationRequest]:
        """
        Receive all data from the client connection and return one request per non-empty line.

        Invalid UTF-8 is replaced rather than rejected, so the affected line
        fails tokenization instead of stopping the server.

        :param socket.socket conn: Connected client socket

        :return: Requests numbered by their line in the input
        :rtype: List[OperationRequest]
        """
        # Data may arrive split across several packets
        chunks: List[bytes] = []
        while True:
            chunk: bytes = conn.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
        data: List[str] = b"".join(chunks).decode("utf-8", errors="replace").splitlines()
        return [
            OperationRequest(expression=line.strip(), line_number=line_number)
            for line_number, line in enumerate(data, start=1)
            if line.strip()
        ]

    def _spawn_worker(self, request: OperationRequest) -> ActiveWorker:
        """
        Spawn a WorkerProcess for the given request.

        :param OperationRequest request: Expression and its line number in the input

        :return: Tuple of (Process, parent end of the pipe)
        :rtype: ActiveWorker
        """
        parent_conn, child_conn = Pipe()
        worker = WorkerProcess(
            conn=child_conn,
            expression=request.expression,
            line_number=request.line_number,
            strict=self.strict,
        )
        process = Process(target=worker.run)
        process.start()
        return process, parent_conn

    @staticmethod
    def _write_payload(payload: dict, f_out: TextIO) -> None:
        outcome = OperationResult.model_validate(payload)
        f_out.write(outcome.format_line() + "\n")
        f_out.flush()

    def _collect_finished_workers(self, active_workers: List[ActiveWorker], f_out: TextIO) -> None:
        """
        Collect results from all finished workers and write them to the output file.

        Finished workers are removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Connection)
        :param TextIO f_out: Open file handle for writing results
        """
        # Reverse order so pops do not shift pending indices
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            if not proc.is_alive():
                payload = pipe_conn.recv()
                pipe_conn.close()
                proc.join()
                active_workers.pop(i)
                self._write_payload(payload, f_out)

    def process_lines(self, requests: List[OperationRequest], f_out: TextIO) -> None:
        """
        Evaluate every request with a bounded pool of worker processes.

        :param List[OperationRequest] requests: One request per non-empty input line
        :param TextIO f_out: Open file handle for writing results
        """
        max_workers: int = max(1, min(cpu_count(), len(requests)))
        active_workers: List[ActiveWorker] = []

        for request in requests:
            while len(active_workers) >= max_workers:
                self._collect_finished_workers(active_workers, f_out)
            active_workers.append(self._spawn_worker(request))

        while active_workers:
            self._collect_finished_workers(active_workers, f_out)

    def start(self) -> None:
        """
        Start the TCP server, accept one client connection, and process its expressions.

        Steps:
            1. Bind and listen on the specified host and port.
            2. Accept a single client connection.
            3. Receive all expressions from the client.
            4. Evaluate them in worker processes, writing results as they finish.
            5. Send the results file back to the client.

        :return: None
        """
        logger.info(f"🖥️ Starting server on {self.host}:{self.port}")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((str(self.host), self.port))
            s.listen()
            logger.info("🖥️ Server listening")

            conn, _ = s.accept()
            with conn:
                with self.output_file.open("w", encoding="utf-8") as f_out:
                    requests: List[OperationRequest] = self._receive_data(conn)
                    logger.info(f"📥 Received {len(requests)} expression(s)")
                    self.process_lines(requests, f_out)

                try:
                    conn.sendall(self.output_file.read_bytes())
                    logger.info("✉️ Results sent to client")
                except OSError as exc:
                    logger.error(f"🔌❌ Client disconnected before receiving results: {exc}")
