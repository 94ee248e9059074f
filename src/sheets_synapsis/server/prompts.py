"""Prompt templates exposed by the MCP server."""

from .main import mcp

DEFAULT_ANALYSIS_RANGE = "A1:Z100"
DEFAULT_REPORT_SECTIONS = "Summary,Data,Analysis,Conclusions"


@mcp.prompt()
def analyze_sheet_data(sheet_id: str, range_name: str = DEFAULT_ANALYSIS_RANGE) -> str:
    """Analyze data in a Google Sheet and provide insights."""
    return (
        f'Please analyze the data in Google Sheet "{sheet_id}" (range: {range_name}). '
        "First use the get_sheet_data tool to retrieve the data, then provide:\n"
        "1. A summary of the data structure (columns, row count)\n"
        "2. Key statistics or patterns\n"
        "3. Any data quality issues\n"
        "4. Actionable insights"
    )


@mcp.prompt()
def create_report_template(title: str, sections: str = DEFAULT_REPORT_SECTIONS) -> str:
    """Create a structured report template in a Google Sheet."""
    return (
        f'Create a new Google Sheet titled "{title}" with the following report '
        f"sections as tabs: {sections}. Use the create_sheet tool, then use "
        "update_sheet to add headers and structure to each tab."
    )
