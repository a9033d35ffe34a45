#!/usr/bin/env python3
"""Replay the person event demo.

A producer encodes person events as JSON upsert/delete messages, a FIFO
queue carries the strings, and a consumer decodes them and merges them into
an id-keyed person store.

Usage
-----
::

    python scripts/person_demo.py
    python scripts/person_demo.py --single-record
    python scripts/person_demo.py --verbose

Options::

    --single-record   Patch one record in place instead of an id-keyed store
    --verbose / -v    Enable debug logging (message tracing)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyternary import (  # noqa: E402
    ABSENT,
    NULL,
    MessageQueue,
    NamedPersonEvent,
    NamedPersonRecord,
    PersonEvent,
    PersonMessage,
    PersonRecord,
    RecordStore,
    TernaryConfig,
    TriState,
    build_delete_message,
    build_update_message,
    consume,
    decode,
    encode,
    merge_record,
)

LOG = logging.getLogger("person_demo")


def produce_person_messages(queue: MessageQueue) -> None:
    events = [
        # Birth of John
        PersonEvent(person_id=1, first_name=TriState.of("John"), family_name=TriState.of("Doe")),
        # Birth of Jane
        PersonEvent(person_id=2, first_name=TriState.of("Jane"), family_name=TriState.of("Deer")),
        # John marries Jane; his names stay
        PersonEvent(person_id=1, spouse_id=TriState.of(2)),
        # Jane marries John and changes her family name
        PersonEvent(person_id=2, family_name=TriState.of("Doe"), spouse_id=TriState.of(1)),
        # John gets divorced
        PersonEvent(person_id=1, spouse_id=NULL),
        # And Jane too, but she keeps the family name
        PersonEvent(person_id=2, spouse_id=NULL),
    ]
    for event in events:
        queue.push(build_update_message(event, PersonMessage))
    # John dies
    queue.push(build_delete_message(1, PersonMessage))


def run_store_demo(config: TernaryConfig) -> None:
    queue = MessageQueue.from_config(config)
    store: RecordStore[PersonRecord] = RecordStore(PersonRecord)
    produce_person_messages(queue)
    LOG.info("Queued %d message(s)", len(queue))
    count = consume(queue, store, PersonMessage, config=config)
    LOG.info("Applied %d message(s)", count)
    for person_id, person in store.items():
        print(f"{person_id} -> {person!r}")


def run_single_record_demo() -> None:
    queue = MessageQueue()
    # Birth of John
    queue.push(encode(NamedPersonEvent(name="John", family_name=TriState.of("Doe"), spouse_name=ABSENT)))
    # John marries Jane Deer
    queue.push(encode(NamedPersonEvent(name="John", family_name=TriState.of("Deer"), spouse_name=TriState.of("Jane"))))
    # John gets divorced but keeps the family name
    queue.push(encode(NamedPersonEvent(name="John", spouse_name=NULL)))

    record = NamedPersonRecord()
    for text in queue.drain():
        record = merge_record(record, decode(text, NamedPersonEvent))
        print(repr(record))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--single-record", action="store_true", help="patch one record in place")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
    )

    if args.single_record:
        run_single_record_demo()
    else:
        run_store_demo(TernaryConfig.from_env(trace_messages=args.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
