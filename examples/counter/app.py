"""Counter — chained dispatch and meta-events.

``POST /counter/:amount`` raises ``counter.add``; the handler for that
event only updates state. A ``$.counter.add`` observer runs after every
``counter.add`` handler has finished and renders the new total, so the
response always reflects the fully folded state.

Run:
    python app.py
"""

from rose import App, Dispatch, Result

app = App(state={"total": 0, "history": ()})

app.post("/counter/:amount", "http.request.add")
app.get("/counter", "http.request.show")


@app.on("http.request.add")
def parse_amount(state, params):
    try:
        amount = int(params["amount"])
    except ValueError:
        return Result(
            state,
            Dispatch("http.response.json", {"body": {"error": "amount must be an integer"}, "status": 400}),
        )
    return Result(state, Dispatch("counter.add", amount))


@app.on("counter.add")
def add(state, amount):
    return Result({**state, "total": state["total"] + amount})


@app.on("counter.add")
def record(state, amount):
    return Result({**state, "history": (*state["history"], amount)})


@app.on("$.counter.add")
def render_total(state, _payload):
    return Result(state, Dispatch("http.response.json", {"body": {"total": state["total"]}}))


@app.on("http.request.show")
def show(state, _params):
    body = {"total": state["total"], "history": list(state["history"])}
    return Result(state, Dispatch("http.response.json", {"body": body}))


if __name__ == "__main__":
    app.serve()
