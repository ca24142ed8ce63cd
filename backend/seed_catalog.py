"""Seed the catalogue with categories and common Indian medicines."""
from datetime import date
from decimal import Decimal

from pharmacy.db.init_db import init_db
from pharmacy.db.session import SessionLocal
from pharmacy.models.category import Category
from pharmacy.models.medicine import Medicine

CATALOG = {
    "Pain & Fever": [
        {"name": "Paracetamol 500mg", "brand": "Crocin", "price": 2.50, "units": 200,
         "description": "Fever, headache, body pain"},
        {"name": "Dolo 650", "brand": "Micro Labs", "price": 3.00, "units": 180,
         "description": "High fever, post-vaccination pain"},
        {"name": "Brufen 400mg", "brand": "Abbott", "price": 4.00, "units": 90,
         "description": "Ibuprofen for inflammation and pain"},
        {"name": "Combiflam", "brand": "Sanofi", "price": 4.50, "units": 120,
         "description": "Ibuprofen + paracetamol"},
    ],
    "Antibiotics": [
        {"name": "Amoxicillin 500mg", "brand": "Mox", "price": 8.00, "units": 60,
         "description": "Bacterial infections"},
        {"name": "Azithromycin 500mg", "brand": "Azithral", "price": 24.00, "units": 45,
         "description": "Respiratory and skin infections"},
        {"name": "Ciprofloxacin 500mg", "brand": "Ciplox", "price": 6.50, "units": 8,
         "description": "Urinary tract infections"},
    ],
    "Allergy": [
        {"name": "Cetirizine 10mg", "brand": "Okacet", "price": 1.80, "units": 250,
         "description": "Sneezing, runny nose, itching"},
        {"name": "Montelukast 10mg", "brand": "Montair", "price": 12.00, "units": 5,
         "description": "Allergic rhinitis and asthma"},
    ],
    "Digestive": [
        {"name": "Pantoprazole 40mg", "brand": "Pan 40", "price": 9.00, "units": 140,
         "description": "Acidity and reflux"},
        {"name": "ORS Sachet", "brand": "Electral", "price": 20.00, "units": 75,
         "description": "Dehydration from diarrhoea"},
    ],
    "Vitamins": [
        {"name": "Vitamin D3 60K", "brand": "Uprise", "price": 30.00, "units": 40,
         "description": "Weekly vitamin D supplement"},
        {"name": "Vitamin B Complex", "brand": "Becosules", "price": 3.50, "units": 300,
         "description": "B-vitamin deficiency"},
    ],
}


def seed_catalog():
    init_db()
    db = SessionLocal()
    try:
        if db.query(Medicine).count():
            print("Catalogue already seeded, nothing to do.")
            return

        expiry = date(date.today().year + 2, 12, 31)
        added = 0
        for category_name, medicines in CATALOG.items():
            category = Category(name=category_name)
            db.add(category)
            db.flush()
            for med in medicines:
                db.add(
                    Medicine(
                        name=med["name"],
                        brand=med["brand"],
                        description=med["description"],
                        price=Decimal(str(med["price"])),
                        quantity_in_stock=med["units"],
                        expiry_date=expiry,
                        category_id=category.id,
                    )
                )
                added += 1
        db.commit()

        print(f"\nAdded {len(CATALOG)} categories and {added} medicines")
        print("=" * 80)
        for category_name, medicines in CATALOG.items():
            print(f"  {category_name}")
            for med in medicines:
                print(f"     {med['name']:<24} Rs {med['price']:>7.2f} | stock {med['units']}")
        print()
    finally:
        db.close()


if __name__ == "__main__":
    seed_catalog()
