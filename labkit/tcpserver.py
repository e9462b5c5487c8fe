"""A tiny TCP server that answers every client with a fixed HTTP reply."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading

PORT = 1729
READ_SIZE = 1024
PROCESSING_DELAY = 8.0
RESPONSE = b"HTTP/1.1 200 OK\r\n\r\nHello from TCP server!\r\n"

logger = logging.getLogger(__name__)


def handle_connection(connection: socket.socket, delay: float = PROCESSING_DELAY) -> bytes:
    """Read one chunk from the client, wait ``delay`` seconds, reply and close.

    Returns the bytes that were read.
    """
    with connection:
        data = connection.recv(READ_SIZE)
        if not data:
            raise ConnectionError("connection closed before any data was read")
        print("Processing data from client...")
        if delay > 0:
            threading.Event().wait(delay)
        connection.sendall(RESPONSE)
    return data


def _accept(server_socket: socket.socket) -> tuple[socket.socket, object] | None:
    try:
        return server_socket.accept()
    except OSError as error:
        logger.error("Error accepting connection: %s", error)
        return None


def _describe(address: object) -> str:
    if isinstance(address, tuple) and len(address) >= 2:
        return f"{address[0]}:{address[1]}"
    return str(address)


def serve_once(server_socket: socket.socket) -> object | None:
    """Accept one client, report its address and close it at once."""
    accepted = _accept(server_socket)
    if accepted is None:
        return None
    connection, address = accepted
    with connection:
        print("Client connected:", _describe(address))
    return address


def serve_one_request(server_socket: socket.socket, delay: float = PROCESSING_DELAY) -> bytes | None:
    """Accept one client and answer it; return what it sent, or None if accept failed."""
    accepted = _accept(server_socket)
    if accepted is None:
        return None
    connection, _ = accepted
    return handle_connection(connection, delay)


def serve_sequential(
    server_socket: socket.socket,
    delay: float = PROCESSING_DELAY,
    max_connections: int | None = None,
) -> int:
    """Answer clients one at a time until accept fails or the limit is reached.

    Returns how many clients were served.
    """
    served = 0
    while max_connections is None or served < max_connections:
        print("Waiting for client connection...")
        accepted = _accept(server_socket)
        if accepted is None:
            break
        connection, address = accepted
        print("Client connected:", _describe(address))
        handle_connection(connection, delay)
        served += 1
    return served


def _handle_logged(connection: socket.socket, delay: float) -> None:
    try:
        handle_connection(connection, delay)
    except OSError as error:
        logger.error("Error handling connection: %s", error)


def serve_concurrent(
    server_socket: socket.socket,
    delay: float = PROCESSING_DELAY,
    max_connections: int | None = None,
) -> int:
    """Answer each client on its own thread until accept fails or the limit is reached.

    Waits for the handlers still running and returns how many clients were accepted.
    """
    served = 0
    handlers: list[threading.Thread] = []
    try:
        while max_connections is None or served < max_connections:
            print("Waiting for client connection...")
            accepted = _accept(server_socket)
            if accepted is None:
                break
            connection, address = accepted
            print("Client connected:", _describe(address))
            handler = threading.Thread(target=_handle_logged, args=(connection, delay), daemon=True)
            handler.start()
            handlers = [thread for thread in handlers if thread.is_alive()]
            handlers.append(handler)
            served += 1
    finally:
        for handler in handlers:
            handler.join()
    return served


def open_listener(host: str = "", port: int = PORT) -> socket.socket:
    """Open a listening TCP socket on ``host`` and ``port``."""
    return socket.create_server((host, port))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Answer TCP clients with a fixed HTTP reply.")
    parser.add_argument("--mode", choices=("simple", "v2", "v3", "v4"), default="v4")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--delay", type=float, default=PROCESSING_DELAY)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
    try:
        listener = open_listener(args.host, args.port)
    except OSError as error:
        logger.error("Error starting TCP server: %s", error)
        return 1

    with listener:
        print(f"TCP server is listening on port {args.port}...")
        try:
            if args.mode == "simple":
                serve_once(listener)
            elif args.mode == "v2":
                serve_one_request(listener, args.delay)
            elif args.mode == "v3":
                serve_sequential(listener, args.delay)
            else:
                serve_concurrent(listener, args.delay)
        except ConnectionError as error:
            logger.error("Error reading from connection: %s", error)
            return 1
        except KeyboardInterrupt:
            pass
    print("Server stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())