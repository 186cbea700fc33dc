"""
Abstract base class for tabular format writers.

Writers receive generated records as a pandas DataFrame, so every analytic
format shares one conversion from delimited text.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd


class BaseWriter(ABC):
    """
    Abstract base class for DataFrame format writers.

    Attributes:
        extension: File extension written by this writer, without the dot
    """

    extension: str = ""

    @abstractmethod
    def write(self, df: pd.DataFrame, output_path: Path, **kwargs) -> None:
        """
        Write a DataFrame to a single file.

        Args:
            df: DataFrame to write
            output_path: Path where the file should be written
            **kwargs: Additional format-specific options

        Raises:
            ValueError: If DataFrame is empty
            IOError: If file cannot be written
        """
        pass
