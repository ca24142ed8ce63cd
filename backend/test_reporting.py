"""Orders table, CSV export and dashboard counters."""
import csv
import io
from datetime import date, datetime, timezone


def _add_line(client, order_id, medicine_id, quantity=1):
    resp = client.post("/orderdetails", json={"orderId": order_id, "medicineId": medicine_id, "quantity": quantity})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _pay(client, order_id, amount, method="Card", status="Success"):
    resp = client.post(
        "/payments",
        json={"orderId": order_id, "amountPaid": amount, "paymentMethod": method, "paymentStatus": status},
    )
    assert resp.status_code == 201, resp.text


def test_antibiotics_scenario(client, make_customer):
    category_id = client.post("/categories", json={"name": "Antibiotics"}).json()["id"]
    medicine_id = client.post(
        "/medicines",
        json={"name": "Amoxicillin", "price": 12.50, "quantityInStock": 5, "categoryId": category_id},
    ).json()["id"]
    _, customer_id = make_customer(full_name="Meera Nair", email="meera@medplus.in")
    order_id = client.post("/orders", json={"customerId": customer_id, "totalAmount": 0, "status": "Pending"}).json()["id"]

    line = _add_line(client, order_id, medicine_id, quantity=2)

    assert line["unitPrice"] == 12.5
    assert line["quantity"] == 2
    rows = client.get("/orders").json()
    assert len(rows) == 1
    row = rows[0]
    assert row["id"] == order_id
    assert row["reference"] == f"ORD-{order_id}"
    assert row["itemCount"] == 1
    assert row["customerName"] == "Meera Nair"
    assert row["customerEmail"] == "meera@medplus.in"
    assert row["shippingAddress"] == "12 MG Road, Bengaluru"
    assert row["paymentMethod"] is None
    assert row["paymentStatus"] is None


def test_list_search_and_status_filter(client, make_customer, make_order):
    _, asha = make_customer(full_name="Asha Verma", email="asha@medplus.in")
    _, kiran = make_customer(full_name="Kiran Rao", email="kiran@apollo.in")
    first = make_order(asha)
    second = make_order(kiran)
    client.put(f"/orders/{second}/status", json={"status": "Processing"})

    def ids(**params):
        return [r["id"] for r in client.get("/orders", params=params).json()]

    assert ids() == [second, first]
    assert ids(search="ASHA") == [first]
    assert ids(search="apollo") == [second]
    assert ids(search=str(second)) == [second]
    assert ids(status="Processing") == [second]
    assert ids(status="All") == [second, first]
    assert ids(customerId=asha) == [first]
    assert ids(search="nobody") == []


def test_search_wildcards_match_literally(client, make_customer, make_order):
    _, asha = make_customer(full_name="Asha Verma", email="asha@medplus.in")
    _, kiran = make_customer(full_name="Kiran 100% Rao", email="kiran_rao@apollo.in")
    make_order(asha)
    kiran_order = make_order(kiran)

    def ids(search):
        return [r["id"] for r in client.get("/orders", params={"search": search}).json()]

    assert ids("%") == [kiran_order]
    assert ids("_") == [kiran_order]
    assert ids("Verma%") == []


def test_listing_shows_latest_payment(client, make_customer, make_order):
    _, customer_id = make_customer()
    order_id = make_order(customer_id, total=50)
    _pay(client, order_id, 50, method="Card", status="Failed")
    _pay(client, order_id, 50, method="UPI", status="Success")

    row = client.get("/orders").json()[0]

    assert row["paymentMethod"] == "UPI"
    assert row["paymentStatus"] == "Success"


def test_order_status_options(client):
    assert client.get("/orders/status").json() == ["Pending", "Processing", "Delivered", "Cancelled"]


# ------------------------------------------------------------------ export

def test_export_quotes_awkward_fields(client, make_customer, make_order):
    _, customer_id = make_customer(full_name='Verma, Asha "Ash"', email="asha@medplus.in")
    order_id = make_order(customer_id, total=12.5)

    resp = client.get("/orders/export")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == f"attachment; filename=orders-{date.today():%Y%m%d}.csv"
    assert '"Verma, Asha ""Ash"""' in resp.text
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["OrderId", "CustomerName", "CustomerEmail", "OrderDate", "TotalAmount", "Status"]
    assert rows[1][:3] == [str(order_id), 'Verma, Asha "Ash"', "asha@medplus.in"]
    assert rows[1][3] == datetime.now(timezone.utc).strftime("%Y-%m-%d")
    assert rows[1][4:] == ["12.50", "Pending"]


def test_export_filters_by_status(client, make_customer, make_order):
    _, customer_id = make_customer()
    pending = make_order(customer_id)
    delivered = make_order(customer_id)
    client.put(f"/orders/{delivered}/status", json={"status": "Delivered"})

    def exported_ids(**params):
        rows = list(csv.reader(io.StringIO(client.get("/orders/export", params=params).text)))
        return [int(r[0]) for r in rows[1:]]

    assert exported_ids() == [pending, delivered]
    assert exported_ids(status="Delivered") == [delivered]
    assert exported_ids(status="All") == [pending, delivered]


# --------------------------------------------------------------- dashboard

def test_staff_stats(client, make_customer, make_medicine, make_order, register_user):
    admin_id = register_user("admin@medplus.in", role="Admin").json()["userId"]
    make_medicine("Dolo 650")
    make_medicine("Cetirizine 10mg")
    _, a = make_customer()
    _, b = make_customer()
    paid = make_order(a, total=30)
    make_order(b)
    _pay(client, paid, 30)
    _pay(client, paid, 99, status="Failed")

    stats = client.get("/dashboard/stats", params={"role": "Admin", "userId": admin_id}).json()

    assert stats == {"totalMedicines": 2, "totalOrders": 2, "activeCustomers": 2, "totalRevenue": 30.0}


def test_customer_stats_are_scoped(client, make_customer, make_order):
    user_id, mine = make_customer()
    _, other = make_customer()
    first = make_order(mine, total=20)
    make_order(mine)
    make_order(other, total=500)
    _pay(client, first, 20)

    stats = client.get("/dashboard/stats", params={"role": "Customer", "userId": user_id}).json()

    assert stats == {"myOrders": 2, "totalOrders": 2, "totalRevenue": 20.0}


def test_customer_stats_without_profile(client, register_user):
    user_id = register_user("staffer@medplus.in", role="Pharmacist").json()["userId"]

    stats = client.get("/dashboard/stats", params={"role": "Customer", "userId": user_id}).json()

    assert stats == {"myOrders": 0, "totalOrders": 0, "totalRevenue": 0.0}


def test_revenue_is_zero_without_payments(client):
    stats = client.get("/dashboard/stats", params={"role": "Pharmacist", "userId": 1}).json()

    assert stats["totalRevenue"] == 0.0
    assert stats["totalOrders"] == 0


def test_unknown_role_is_bad_request(client):
    resp = client.get("/dashboard/stats", params={"role": "Visitor", "userId": 1})

    assert resp.status_code == 400


def test_recent_orders(client, make_customer, make_order):
    user_id, mine = make_customer(full_name="Asha Verma")
    _, other = make_customer(full_name="Kiran Rao")
    own = [make_order(mine) for _ in range(2)]
    others = [make_order(other) for _ in range(4)]

    staff = client.get("/dashboard/recent-orders", params={"role": "Admin", "userId": 1}).json()
    customer = client.get("/dashboard/recent-orders", params={"role": "Customer", "userId": user_id}).json()
    limited = client.get("/dashboard/recent-orders", params={"role": "Pharmacist", "userId": 1, "limit": 2}).json()

    assert [o["id"] for o in staff] == list(reversed(others))
    assert staff[0]["customerName"] == "Kiran Rao"
    assert [o["id"] for o in customer] == list(reversed(own))
    assert all(o["customerName"] is None for o in customer)
    assert len(limited) == 2
