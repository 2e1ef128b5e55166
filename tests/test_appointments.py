from __future__ import annotations


def test_appointments_list_empty(client):
    assert "No appointments scheduled" in client.get("/dashboard/appointments").text


def test_create_appointment_stores_utc(client, gateway, ctx):
    acme = gateway.insert(ctx, "clients", {"name": "Acme Traders"})
    resp = client.post(
        "/dashboard/appointments",
        data={
            "title": "Tax review",
            "appointment_date": "2025-03-01T10:30",
            "duration_minutes": "90",
            "client_id": acme["id"],
            "status": "scheduled",
            "location": "",
        },
        follow_redirects=False,
    )
    assert resp.status_code == 303

    resp = client.get("/dashboard/appointments")
    assert "Appointment created successfully" in resp.text
    assert "with Acme Traders" in resp.text
    assert "90 minutes" in resp.text

    (row,) = gateway.select(ctx, "appointments")
    assert row["appointment_date"] == "2025-03-01T10:30:00Z"
    assert row["location"] is None


def test_appointments_are_listed_soonest_first(client, gateway, ctx):
    gateway.insert(ctx, "appointments", {"title": "Later", "appointment_date": "2025-06-01T09:00:00Z"})
    gateway.insert(ctx, "appointments", {"title": "Sooner", "appointment_date": "2025-02-01T09:00:00Z"})

    text = client.get("/dashboard/appointments").text
    assert text.index("Sooner") < text.index("Later")


def test_create_appointment_without_date_fails(client, gateway, ctx):
    client.post(
        "/dashboard/appointments",
        data={"title": "Tax review", "appointment_date": ""},
        follow_redirects=False,
    )
    assert "Error creating appointment" in client.get("/dashboard/appointments").text
    assert gateway.select(ctx, "appointments") == []


def test_edit_form_prefills_datetime(client, gateway, ctx):
    row = gateway.insert(
        ctx, "appointments", {"title": "Review", "appointment_date": "2025-03-01T10:30:00Z"}
    )
    resp = client.get(f"/dashboard/appointments/{row['id']}/edit")
    assert resp.status_code == 200
    assert 'value="2025-03-01T10:30"' in resp.text


def test_reschedule_and_delete_appointment(client, gateway, ctx):
    row = gateway.insert(
        ctx, "appointments", {"title": "Review", "appointment_date": "2025-03-01T10:30:00Z"}
    )
    client.post(
        f"/dashboard/appointments/{row['id']}",
        data={"title": "Review", "appointment_date": "2025-03-05T11:00", "status": "rescheduled"},
        follow_redirects=False,
    )
    updated = gateway.get(ctx, "appointments", row["id"])
    assert updated["status"] == "rescheduled"
    assert updated["appointment_date"] == "2025-03-05T11:00:00Z"

    resp = client.delete(f"/dashboard/appointments/{row['id']}")
    assert resp.headers["HX-Redirect"] == "/dashboard/appointments"
    assert gateway.select(ctx, "appointments") == []
