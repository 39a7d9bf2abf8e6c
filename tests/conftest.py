import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture
def no_popups(monkeypatch):
	"""Replaces plt.show() so plotting methods can run without a display"""
	shown = []
	monkeypatch.setattr(plt, "show", lambda *args, **kwargs: shown.append(plt.gcf()))
	yield shown
	plt.close("all")
