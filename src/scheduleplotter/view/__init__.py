"""
The VIEW layer: Qt widgets drawing the chart and hosting it.
"""
