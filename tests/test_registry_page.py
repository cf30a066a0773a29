import re

ITEM = re.compile(r"<li>(.*?)</li>")


def list_items(html):
    return ITEM.findall(html)


def test_page_lists_every_student_in_order(client, add_students):
    add_students(("Alice", 20), ("Bob", 21), ("Carol", 19))

    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert list_items(resp.text) == [
        "Alice - Age: 20",
        "Bob - Age: 21",
        "Carol - Age: 19",
    ]
    assert resp.text.count("<ul>") == 1
    assert "No students yet" not in resp.text


def test_page_renders_title_and_form(client):
    resp = client.get("/")

    assert "<title>Student Management System</title>" in resp.text
    assert '<form action="/add_student" method="post">' in resp.text
    assert 'name="name"' in resp.text
    assert 'name="age"' in resp.text


def test_empty_table_shows_placeholder_without_list(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "No students yet" in resp.text
    assert "<ul>" not in resp.text
    assert "<li>" not in resp.text


def test_names_are_html_escaped(client, add_students):
    add_students(("<b>Mallory</b>", 30))

    resp = client.get("/")

    assert list_items(resp.text) == ["&lt;b&gt;Mallory&lt;/b&gt; - Age: 30"]


def test_unreachable_database_replaces_whole_page(client, unreachable_db):
    resp = client.get("/")

    assert resp.status_code == 503
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("Database connection failed: ")
    assert "unable to open database file" in resp.text
    assert "\n" not in resp.text
    assert "<form" not in resp.text
    assert "<li>" not in resp.text


def test_connection_released_after_page_load(client, add_students, pool):
    add_students(("Alice", 20))

    client.get("/")

    assert pool.checkedout() == 0


def test_add_student_then_page_shows_it(client):
    resp = client.post(
        "/add_student",
        data={"name": "Alice", "age": "20"},
        follow_redirects=False,
    )

    assert resp.status_code == 303
    assert resp.headers["location"] == "/"

    page = client.get("/")
    assert "Alice - Age: 20" in list_items(page.text)


def test_add_student_follows_redirect_to_page(client):
    resp = client.post("/add_student", data={"name": "Bob", "age": "21"})

    assert resp.status_code == 200
    assert list_items(resp.text) == ["Bob - Age: 21"]


def test_add_student_rejects_non_numeric_age(client):
    resp = client.post("/add_student", data={"name": "Alice", "age": "twenty"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "age" in body["error"]["details"]


def test_add_student_rejects_empty_name(client):
    resp = client.post("/add_student", data={"name": "", "age": "20"})

    assert resp.status_code == 422
    assert "name" in resp.json()["error"]["details"]


def test_add_student_with_unreachable_database(client, unreachable_db):
    resp = client.post(
        "/add_student",
        data={"name": "Alice", "age": "20"},
        follow_redirects=False,
    )

    assert resp.status_code == 503
    assert resp.text.startswith("Database connection failed: ")


def test_multi_line_driver_error_collapses_to_one_line(client, refused_db):
    resp = client.get("/")

    assert resp.status_code == 503
    assert resp.text == (
        'Database connection failed: connection to server at "127.0.0.1", port 1 failed: '
        "Connection refused Is the server running on that host and accepting TCP/IP connections?"
    )
    assert refused_db.closed
