"""Concurrency building blocks: channels, worker pools and a visitor counter."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable, Iterator, Mapping
from socketserver import ThreadingMixIn
from typing import Any, TextIO
from wsgiref.simple_server import WSGIServer, make_server

_DEFAULT_ITERATIONS = 10


class Channel:
    """A closable FIFO handing items from senders to receivers.

    With capacity 0 a send waits until its item has been received;
    otherwise a send waits only while the buffer is full.
    """

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: deque[Any] = deque()
        self._closed = False
        self._sent = 0
        self._received = 0
        self._cond = threading.Condition()

    def send(self, item: Any) -> None:
        """Put an item on the channel, blocking as the capacity requires."""
        with self._cond:
            if self.capacity:
                while len(self._items) >= self.capacity and not self._closed:
                    self._cond.wait()
            if self._closed:
                raise ValueError("send on closed channel")
            self._items.append(item)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            if not self.capacity:
                while self._received < ticket:
                    self._cond.wait()

    def close(self) -> None:
        """Mark the channel closed; receivers drain what is left and stop."""
        with self._cond:
            if self._closed:
                raise ValueError("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def _receive(self) -> tuple[bool, Any]:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                return False, None
            item = self._items.popleft()
            self._received += 1
            self._cond.notify_all()
            return True, item

    def __iter__(self) -> Iterator[Any]:
        while True:
            ok, item = self._receive()
            if not ok:
                return
            yield item


def task(
    name: str,
    iterations: int = _DEFAULT_ITERATIONS,
    delay: float = 1.0,
    output: TextIO | None = None,
) -> None:
    """Report progress of a named task once per step, pausing between steps."""
    stream = output if output is not None else sys.stdout
    for step in range(iterations):
        stream.write(f"{step}: Task {name} is running\n")
        time.sleep(delay)


def run_tasks(
    names: Iterable[str],
    iterations: int | Mapping[str, int] = _DEFAULT_ITERATIONS,
    delay: float = 1.0,
    output: TextIO | None = None,
) -> None:
    """Run one task per name in its own thread and wait for all of them.

    ``iterations`` is either one count for all tasks or a count per name.
    """

    def count_for(name: str) -> int:
        if isinstance(iterations, Mapping):
            return iterations.get(name, _DEFAULT_ITERATIONS)
        return iterations

    threads = [
        threading.Thread(target=task, args=(name, count_for(name), delay, output))
        for name in names
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def publish(channel: Channel, count: int = 10) -> None:
    """Send the numbers 0 to count - 1 and close the channel."""
    for number in range(count):
        channel.send(number)
    channel.close()


def load_balance(
    items: Iterable[Any],
    workers: int,
    handle: Callable[[int, Any], None],
) -> None:
    """Share items among a pool of workers; each call gets the worker id and item."""
    if workers < 1:
        raise ValueError("at least one worker is needed")
    channel = Channel()

    def work(worker_id: int) -> None:
        for item in channel:
            handle(worker_id, item)

    threads = [threading.Thread(target=work, args=(worker_id,)) for worker_id in range(workers)]
    for thread in threads:
        thread.start()
    try:
        for item in items:
            channel.send(item)
    finally:
        channel.close()
        for thread in threads:
            thread.join()


class VisitorCounter:
    """A counter that many threads may increase safely."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        """Add one visit and return the new count."""
        with self._lock:
            self._value += 1
            return self._value


def visitor_app(counter: VisitorCounter, delay: float = 0.3) -> Callable:
    """A WSGI application greeting each visitor with their number."""

    def app(environ: dict, start_response: Callable) -> list[bytes]:
        counter.increment()
        time.sleep(delay)
        body = f"Você é o visitante número {counter.value}".encode("utf-8")
        start_response(
            "200 OK",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]

    return app


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def main(argv: list[str] | None = None) -> int:
    """Run one of the concurrency demonstrations."""
    parser = argparse.ArgumentParser(description="Concurrency demonstrations.")
    commands = parser.add_subparsers(dest="command", required=True)

    tasks_cmd = commands.add_parser("tasks", help="run tasks A, B and anonymous concurrently")
    tasks_cmd.add_argument("--delay", type=float, default=1.0)

    serve_cmd = commands.add_parser("serve", help="serve the visitor counter over HTTP")
    serve_cmd.add_argument("--port", type=int, default=3000)
    serve_cmd.add_argument("--delay", type=float, default=0.3)

    commands.add_parser("range", help="receive published numbers until the channel closes")

    balance_cmd = commands.add_parser("balance", help="share numbers among workers")
    balance_cmd.add_argument("--workers", type=int, default=100)
    balance_cmd.add_argument("--items", type=int, default=1000)
    balance_cmd.add_argument("--delay", type=float, default=1.0)

    args = parser.parse_args(argv)

    if args.command == "tasks":
        run_tasks(["A", "B", "anonymous"], {"A": 10, "B": 10, "anonymous": 5}, args.delay)
    elif args.command == "serve":
        app = visitor_app(VisitorCounter(), args.delay)
        with make_server("", args.port, app, server_class=_ThreadingWSGIServer) as server:
            try:
                server.serve_forever()
            except KeyboardInterrupt:
                pass
    elif args.command == "range":
        channel = Channel()
        publisher = threading.Thread(target=publish, args=(channel,))
        publisher.start()
        for number in channel:
            print(f"Received {number}")
        publisher.join()
    else:
        delay = args.delay

        def report(worker_id: int, item: int) -> None:
            sys.stdout.write(f"Worker {worker_id} received {item}\n")
            time.sleep(delay)

        load_balance(range(args.items), args.workers, report)
    return 0