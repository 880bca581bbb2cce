from .paths import get_corpus_path, get_data_dir
from .plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


__all__ = [
    "DEFAULT_PLOT_CFG",
    "PlottingConfig",
    "get_corpus_path",
    "get_data_dir",
]
