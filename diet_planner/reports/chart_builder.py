# diet_planner/reports/chart_builder.py
"""
Chart builder for adherence score trends with moving averages.

Generates a matplotlib chart of daily scores and their rolling average,
with gaps preserved (days without a meaningful log show as breaks).
"""
import os
import webbrowser
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # Headless backend
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

SCORE_COLUMNS = [
    ("daily_score", "Daily score"),
]


class ScoreChartBuilder:
    """
    Builds adherence trend charts.

    Shows:
    - Daily score (solid line)
    - Moving average (dashed line)
    - Gaps in data (line breaks)
    - Single-day values (marked with +/x)
    """

    def __init__(self, output_file: Path = Path("diet_score_trend.jpg")):
        """
        Initialize chart builder.

        Args:
            output_file: Output file path
        """
        self.output_file = Path(output_file)

    def build_from_dataframe(self, df: pd.DataFrame, window: int = 7,
                             title: Optional[str] = None, open_browser: bool = True) -> bool:
        """
        Build chart from a DataFrame with date and daily_score columns.

        Args:
            df: Score rows
            window: Moving average window (days)
            title: Chart title (optional)
            open_browser: Open the saved image afterwards

        Returns:
            True if a chart was written
        """
        if df.empty:
            print("(no data to chart)")
            return False

        df = self.prepare_data(df)
        if df.empty:
            print("(no valid data to chart)")
            return False

        full_df = self.continuous_calendar(df)
        roll_df = full_df.rolling(window=max(1, window), min_periods=1).mean()

        self._create_chart(full_df, roll_df, window, title)

        if open_browser:
            webbrowser.open(os.path.abspath(self.output_file))
            print(f"Chart saved to {self.output_file} and opened in browser.")
        else:
            print(f"Chart saved to {self.output_file}.")
        return True

    def prepare_data(self, df: pd.DataFrame) -> pd.DataFrame:
        """Convert dates, coerce scores to numbers, sort."""
        df = df.copy()
        df["date"] = pd.to_datetime(df["date"], errors="coerce")
        df = df.dropna(subset=["date"]).sort_values("date").reset_index(drop=True)
        if df.empty:
            return df

        for col, _ in SCORE_COLUMNS:
            if col not in df.columns:
                df[col] = np.nan
            else:
                df[col] = pd.to_numeric(df[col], errors="coerce")
        return df[["date"] + [col for col, _ in SCORE_COLUMNS]]

    def continuous_calendar(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Reindex to every day from first to last date.
        Missing dates become NaN (creates gaps in charts).
        """
        if df.empty:
            return df
        full_idx = pd.date_range(start=df["date"].min(), end=df["date"].max(), freq="D")
        return df.set_index("date").reindex(full_idx)

    def _create_chart(self, daily_df: pd.DataFrame, ma_df: pd.DataFrame,
                      window: int, title: Optional[str]) -> None:
        fig, axes = plt.subplots(len(SCORE_COLUMNS), 1, figsize=(10, 4 * len(SCORE_COLUMNS)),
                                 sharex=True, constrained_layout=True, squeeze=False)
        dates = daily_df.index.values

        for ax, (col, label) in zip(axes[:, 0], SCORE_COLUMNS):
            y_daily = daily_df[col].values.astype(float)
            y_ma = ma_df[col].values.astype(float)

            # Mask MA where daily data is missing (to create gaps)
            y_ma_masked = np.where(np.isnan(y_daily), np.nan, y_ma)

            self._plot_with_gaps(
                ax, dates, y_daily,
                color="black", linestyle="-", linewidth=1.5,
                label="Daily", singleton_marker="+", singleton_label="Daily (+1)"
            )
            self._plot_with_gaps(
                ax, dates, y_ma_masked,
                color="red", linestyle="--", linewidth=2.0,
                label=f"MA({window})", singleton_marker="x",
                singleton_label=f"MA({window}) (x1)"
            )

            ax.set_ylabel(label)
            ax.set_ylim(0, 100)
            ax.grid(True, alpha=0.25)
            ax.legend(loc="upper left", frameon=False)

        axes[-1, 0].set_xlabel("Date")
        fig.suptitle(title or f"Adherence Score + Moving Average ({window} days)", fontsize=14)

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(self.output_file, dpi=150, format="jpg")
        plt.close(fig)

    def _plot_with_gaps(self, ax, dates, values, *, color, linestyle="-",
                        linewidth=1.5, label=None, singleton_label=None,
                        singleton_marker="+", markersize=8):
        """
        Plot data with gaps (NaN breaks line); isolated points get a marker.
        """
        dates = np.asarray(dates)
        y = np.asarray(values, dtype=float)
        valid = ~np.isnan(y)
        if not valid.any():
            return

        idxs = np.where(valid)[0]
        # Calendar is daily, so a gap is a jump of more than one index
        splits = np.where(np.diff(idxs) > 1)[0] + 1
        segments = np.split(idxs, splits)

        used_line_label = False
        used_single_label = False
        for seg in segments:
            if len(seg) == 1:
                i = seg[0]
                lbl = singleton_label if (singleton_label and not used_single_label and not used_line_label) else None
                ax.plot([dates[i]], [y[i]], marker=singleton_marker, color=color,
                        markersize=markersize, linewidth=0, label=lbl)
                if lbl:
                    used_single_label = True
            else:
                lbl = label if not used_line_label else None
                ax.plot(dates[seg], y[seg], color=color, linestyle=linestyle,
                        linewidth=linewidth, label=lbl)
                if lbl:
                    used_line_label = True
