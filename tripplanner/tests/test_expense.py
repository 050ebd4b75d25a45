"""
Tests for expense endpoints.
"""


def test_create_expense(client, auth_headers, trip):
    """Test expense creation."""
    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Dinner", "amount": 42.5},
        headers=auth_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["tripId"] == trip["id"]
    assert data["amount"] == 42.5
    assert data["createdAt"]


def test_create_expense_rejects_negative_amount(client, auth_headers, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Refund", "amount": -5},
        headers=auth_headers
    )
    assert response.status_code == 422


def test_list_expenses(client, auth_headers, trip):
    for description, amount in (("Taxi", 12), ("Museum", 20)):
        client.post(
            f"/api/trips/{trip['id']}/expenses",
            json={"description": description, "amount": amount},
            headers=auth_headers
        )

    response = client.get(f"/api/trips/{trip['id']}/expenses", headers=auth_headers)
    assert response.status_code == 200
    assert sorted(e["description"] for e in response.json()) == ["Museum", "Taxi"]


def test_update_expense(client, auth_headers, trip):
    """Test expense update."""
    expense = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Lunch", "amount": 10},
        headers=auth_headers
    ).json()

    response = client.put(f"/api/expenses/{expense['id']}", json={"amount": 15}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["amount"] == 15
    assert response.json()["description"] == "Lunch"


def test_delete_expense(client, auth_headers, trip):
    """Test expense deletion."""
    expense = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Lunch", "amount": 10},
        headers=auth_headers
    ).json()

    assert client.delete(f"/api/expenses/{expense['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/expenses/{expense['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/trips/{trip['id']}/expenses", headers=auth_headers).json() == []
