import asyncio

from gateway import AsyncQueryClient, QueryClient
from storefront.sync import DataSyncController
from demo import SAMPLE_PRODUCTS

BASE_URL = "http://127.0.0.1:8085"

async def main():
    sync_client = QueryClient(base_url=BASE_URL)
    sync_client.reset()
    sync_client.table("products").insert([p.model_dump() for p in SAMPLE_PRODUCTS]).execute().raise_for_error()

    controller = DataSyncController(AsyncQueryClient(base_url=BASE_URL))

    # Fire overlapping refreshes; only the last one issued may write the snapshot
    print("\n⚡ Running three overlapping refreshes...")
    applied = await asyncio.gather(controller.refresh(), controller.refresh(), controller.refresh())
    print(f"Applied: {applied}")
    print(f"Loading: {controller.loading}")

    print("\n📦 Products (newest first):")
    for p in controller.products:
        print(f"  {p.created_at}  {p.name} [{p.category}]")

if __name__ == "__main__":
    asyncio.run(main())
