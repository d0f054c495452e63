from __future__ import annotations


class SheetConfigError(ValueError):
    pass


class PlotDataError(ValueError):
    pass
