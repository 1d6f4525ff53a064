from .overlay import render_map, save_map, to_html
from .tabular import to_csv, to_dataframe, write_csv

__all__ = ["render_map", "save_map", "to_html", "to_csv", "to_dataframe", "write_csv"]
