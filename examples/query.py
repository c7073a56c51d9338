"""
Send a query and keep the transaction watermark in sync.

Usage:
    export FAUNADB_SECRET="fn..."
    python examples/query.py
"""

import sys
import os
import asyncio
import json
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from faunadb_transport import Config, HttpClient, NetworkError, RequestAborted
from faunadb_transport.logging_setup import setup_structured_logger


class PrintConsumer:
    def on_data(self, chunk):
        print(f"  event: {chunk.strip()}")

    def on_error(self, error):
        print(f"  stream error: {error}")


async def main():
    setup_structured_logger(logging.DEBUG)
    config = Config(query_timeout=5000)

    async with HttpClient(config) as client:
        print(f"Adapter: {type(client.adapter).__name__}")

        try:
            response = await client.execute(method="POST", body=json.dumps({"now": None}))
        except NetworkError as e:
            print(f"Request failed: {e}")
            return

        print(f"[1] status={response.status} body={response.body[:200]}")

        txn_time = response.headers.get("x-txn-time")
        if txn_time:
            client.sync_last_txn_time(int(txn_time))
        print(f"    last seen txn: {client.get_last_txn_time()}")

        # Stop the stream after five seconds
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(5, signal.set)
        print("[2] streaming document events...")
        try:
            await client.execute(
                method="POST",
                path="/stream",
                body=json.dumps({"document": {"@ref": {"id": "1", "collection": "users"}}}),
                stream_consumer=PrintConsumer(),
                signal=signal,
            )
        except RequestAborted:
            print("    stream closed")


if __name__ == "__main__":
    asyncio.run(main())
