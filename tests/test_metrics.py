from app.logic import metrics


def test_safe_ratio():
    assert metrics.safe_ratio(1500, 30) == 50
    assert metrics.safe_ratio(1500, 0) == 0.0


def test_percentage_of():
    assert metrics.percentage_of(800, 1000) == 80
    assert metrics.percentage_of(800, 0) == 0.0


def test_roi_percentage():
    assert metrics.roi_percentage(400, 100) == 300
    assert metrics.roi_percentage(50, 100) == -50
    assert metrics.roi_percentage(400, 0) == 0.0
