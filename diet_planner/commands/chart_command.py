"""
Chart command - adherence trend with moving average.
"""
from .base import Command, register_command
from diet_planner.reports import ScoreChartBuilder
from diet_planner.utils.dates import is_date_key


@register_command
class ChartCommand(Command):
    """Generate adherence score chart."""

    name = "chart"
    help_text = "Generate score chart (chart [window] [start] [end] [noopen])"

    def execute(self, args: str) -> None:
        """
        Generate trend chart.

        Args:
            args: Optional window size, date range and 'noopen' flag
                  Examples:
                    chart
                    chart 14
                    chart 7 2025-01-01
                    chart 7 2025-01-01 2025-01-31 noopen
        """
        tokens = args.strip().split() if args.strip() else []

        window = self.ctx.chart_window
        open_browser = True
        date_tokens = []
        for token in tokens:
            if is_date_key(token):
                date_tokens.append(token)
            elif token.lower() in ("noopen", "--no-open"):
                open_browser = False
            else:
                try:
                    window = max(1, int(token))
                except ValueError:
                    print(f"Ignoring unknown argument: '{token}'")

        start_date = date_tokens[0] if len(date_tokens) >= 1 else None
        end_date = date_tokens[1] if len(date_tokens) >= 2 else None

        logs = self.ctx.store_mgr.store.logs
        selected = {
            key: log for key, log in logs.items()
            if (start_date is None or key >= start_date) and (end_date is None or key <= end_date)
        }

        df = self.ctx.session().score_tracker().score_series(selected)
        if df.empty:
            print("\nNo logged days to chart.\n")
            return

        title_parts = [f"Adherence Score (MA={window} days)"]
        if start_date and end_date:
            title_parts.append(f"{start_date} to {end_date}")
        elif start_date:
            title_parts.append(f"from {start_date}")
        elif end_date:
            title_parts.append(f"to {end_date}")

        builder = ScoreChartBuilder(self.ctx.chart_file)
        builder.build_from_dataframe(df, window=window, title=" - ".join(title_parts),
                                     open_browser=open_browser)
