# util/types.py
from typing import Dict
import numpy as np
from numpy.typing import NDArray


# Flow: one vector per page title, all of the same width.
Vector = NDArray[np.float64]
EmbeddingMap = Dict[str, Vector]
