"""Hello World — the simplest rose app.

Demonstrates a path parameter, a handler that updates app state and
chains into the plain-text response event, and a JSON endpoint.

Run:
    python app.py
"""

from rose import App, AppConfig, Dispatch, Result

app = App(state={"name": None}, config=AppConfig(port=3222))

app.get("/hello/:who", "http.request.hello")
app.get("/api/status", "http.request.status")


@app.on("http.request.hello")
def hello(state, params):
    return Result(
        {**state, "name": params["who"]},
        Dispatch("http.response.plain", {"body": f"Hello: {params['who']}"}),
    )


@app.on("http.request.status")
def status(state, _params):
    return Result(
        state,
        Dispatch("http.response.json", {"body": {"status": "ok", "last_name": state["name"]}}),
    )


if __name__ == "__main__":
    app.serve()
