"""Payments recorded against orders."""


def _pay(client, order_id, amount=25.5, method="Card", status="Success"):
    return client.post(
        "/payments",
        json={"orderId": order_id, "amountPaid": amount, "paymentMethod": method, "paymentStatus": status},
    )


def test_payment_round_trip(client, make_customer, make_order):
    _, customer_id = make_customer()
    order_id = make_order(customer_id, total=25.5)

    resp = _pay(client, order_id)

    assert resp.status_code == 201
    assert resp.headers["location"].endswith(f"/payments/{resp.json()['id']}")
    payments = client.get(f"/payments/order/{order_id}").json()
    assert len(payments) == 1
    assert payments[0]["amountPaid"] == 25.5
    assert payments[0]["paymentMethod"] == "Card"
    assert payments[0]["paymentStatus"] == "Success"
    assert payments[0]["paymentDate"]
    assert client.get(f"/payments/{resp.json()['id']}").json() == payments[0]


def test_status_defaults_to_pending(client, make_customer, make_order):
    _, customer_id = make_customer()
    order_id = make_order(customer_id)

    resp = client.post("/payments", json={"orderId": order_id, "amountPaid": 5, "paymentMethod": "COD"})

    assert resp.status_code == 201
    assert resp.json()["paymentStatus"] == "Pending"


def test_several_payments_per_order(client, make_customer, make_order):
    _, customer_id = make_customer()
    order_id = make_order(customer_id, total=100)

    _pay(client, order_id, amount=40, status="Failed")
    _pay(client, order_id, amount=60)
    _pay(client, order_id, amount=40, method="UPI")

    amounts = [p["amountPaid"] for p in client.get(f"/payments/order/{order_id}").json()]
    assert amounts == [40.0, 60.0, 40.0]
    assert len(client.get("/payments").json()) == 3


def test_payment_for_unknown_order(client):
    resp = _pay(client, 404)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid OrderId"


def test_negative_amount_and_blank_method(client, make_customer, make_order):
    _, customer_id = make_customer()
    order_id = make_order(customer_id)

    assert _pay(client, order_id, amount=-1).status_code == 400
    assert _pay(client, order_id, method="").status_code == 400
    assert _pay(client, order_id, method="   ").status_code == 400


def test_missing_payment(client):
    assert client.get("/payments/31").status_code == 404
    assert client.get("/payments/order/31").json() == []


def test_option_lists(client):
    assert client.get("/payments/methods").json() == ["Card", "UPI", "COD"]
    assert client.get("/payments/status").json() == ["Success", "Failed"]
