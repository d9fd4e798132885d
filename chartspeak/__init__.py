"""ChartSpeak backend package."""
