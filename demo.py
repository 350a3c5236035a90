#!/usr/bin/env python
from gateway import QueryClient
from storefront.models import ProductIn, image_path

SAMPLE_PRODUCTS = [
    ProductIn(name="Clay Bowl", category="Pottery", price=1250,
              description="Hand-thrown terracotta bowl, food safe glaze.", image=image_path("bowl.jpg")),
    ProductIn(name="Blue Pottery Vase", category="Pottery", price=3400,
              description="Multani blue pottery, hand painted."),
    ProductIn(name="Khes Throw", category="Weaving", price=5200,
              description="Handloom cotton throw woven on a pit loom."),
    ProductIn(name="Walnut Jewellery Box", category="Woodwork", price=4800,
              description="Carved walnut box with brass inlay."),
]

def main():
    c = QueryClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting backend...")
    c.reset()

    # -----------------------------
    # Insert products
    # -----------------------------
    print("\nInserting products...")
    rows = c.table("products").insert([p.model_dump() for p in SAMPLE_PRODUCTS]).execute().raise_for_error()
    for row in rows:
        print(row["id"], row["name"])

    # -----------------------------
    # List products, newest first
    # -----------------------------
    print("\nListing products...")
    print(c.table("products").select().order("created_at", desc=True).execute().data)

    # -----------------------------
    # Send an inquiry
    # -----------------------------
    print("\nSending inquiry for 'Clay Bowl'...")
    print(c.table("inquiries").insert({
        "product": "Clay Bowl", "customer": "Asha", "contact": "555-0100", "message": "", "status": "New",
    }).execute().data)

    # -----------------------------
    # Delete a product
    # -----------------------------
    print("\nDeleting the first product...")
    print(c.table("products").delete().eq("id", rows[0]["id"]).execute().data)

    # -----------------------------
    # A failing call reports an error instead of raising
    # -----------------------------
    print("\nInserting into a missing table...")
    print(c.table("orders").insert({"name": "x"}).execute().error)

    print("\nListing inquiries...")
    print(c.table("inquiries").select().order("created_at", desc=True).execute().data)

if __name__ == "__main__":
    main()
