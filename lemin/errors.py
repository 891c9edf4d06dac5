# lemin/errors.py
FORMAT_MESSAGE = "ERROR: invalid data format"
TOPOLOGY_MESSAGE = "ERROR: invalid data format, no path between start and end"


class FormatError(ValueError):
    """Input map violates the line grammar."""

    def __init__(self, detail: str = ""):
        super().__init__(FORMAT_MESSAGE)
        self.detail = detail


class TopologyError(ValueError):
    """Well-formed colony with no usable start -> end path."""

    def __init__(self, detail: str = ""):
        super().__init__(TOPOLOGY_MESSAGE)
        self.detail = detail
