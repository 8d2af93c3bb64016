import pytest

from sales_app.utils.chart import SCATTER_SERIES, ChartCanvas, build_chart
from sales_app.utils.predictor import DEFAULT_SAMPLES, Predictor


class FakeSurface:
    def __init__(self, fail=False):
        self.charts = []
        self.fail = fail

    def altair_chart(self, chart, **kwargs):
        if self.fail:
            raise RuntimeError("render failed")
        self.charts.append((chart, kwargs))


class FakeSlot:
    """Stands in for st.empty(): hands out containers and records clears."""

    def __init__(self, fail=False):
        self.events = []
        self.surfaces = []
        self.fail = fail

    def container(self):
        self.events.append("acquire")
        s = FakeSurface(fail=self.fail)
        self.surfaces.append(s)
        return s

    def empty(self):
        self.events.append("destroy")


@pytest.fixture
def payload():
    return Predictor.computed(DEFAULT_SAMPLES).chart_payload()


def test_build_chart_layers(payload):
    vl = build_chart(payload, title="Sales").to_dict()

    assert len(vl["layer"]) == 2
    assert vl["title"] == "Sales"
    scatter, line = vl["layer"]
    assert scatter["mark"]["type"] == "circle"
    assert line["mark"]["type"] == "line"
    assert line["mark"]["strokeDash"] == [5, 5]
    assert scatter["encoding"]["color"]["scale"]["domain"] == [SCATTER_SERIES, payload.label]


def test_canvas_destroys_before_each_redraw(payload):
    slot = FakeSlot()
    canvas = ChartCanvas(slot)

    canvas.redraw(payload)
    canvas.redraw(payload)

    assert slot.events == ["acquire", "destroy", "acquire"]
    assert canvas.draw_count == 2
    assert canvas.is_drawn
    assert len(slot.surfaces[-1].charts) == 1
    assert slot.surfaces[-1].charts[0][1] == {"use_container_width": True}


def test_canvas_destroy_is_idempotent(payload):
    slot = FakeSlot()
    canvas = ChartCanvas(slot)
    canvas.destroy()
    canvas.redraw(payload)
    canvas.destroy()
    canvas.destroy()
    assert slot.events == ["acquire", "destroy"]
    assert not canvas.is_drawn


def test_canvas_releases_surface_when_drawing_fails(payload):
    slot = FakeSlot(fail=True)
    canvas = ChartCanvas(slot)
    with pytest.raises(RuntimeError):
        canvas.redraw(payload)
    assert slot.events == ["acquire", "destroy"]
    assert not canvas.is_drawn
    assert canvas.draw_count == 0


def test_coefficient_change_triggers_redraw(payload):
    slot = FakeSlot()
    canvas = ChartCanvas(slot)
    predictor = Predictor.computed(DEFAULT_SAMPLES)

    with predictor.subscribed(canvas.redraw):
        predictor.set_coefficients(predictor.coefficients)
    assert canvas.draw_count == 1
    assert canvas.last_payload == payload
