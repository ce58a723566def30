"""
Unified Color Mapping System for Correlograms
Light theme plot styling and the bucketed correlation color scale
"""

import numpy as np
import pandas as pd

# Correlation color scale: 200 buckets of width 0.01 over [-1.00, 1.00]
BUCKET_STEPS = 100
SCALE_HUE = 240
SCALE_SATURATION = 100
MIN_LIGHTNESS = 5
MAX_LIGHTNESS = 100

BUCKET_COLUMNS = ['min', 'max', 'lightness', 'color', 'altcolor']


def get_unified_color_schemes():
    """
    Unified color schemes for light theme only

    Returns:
        dict: Plot styling colors
    """
    return {
        'background': 'white',
        'paper': 'white',
        'text': 'black',
        'text_dark_cell': 'white',
        'empty_cell': '#f4f4f4',
        'theme': 'light'
    }


def hls_to_color(hue, lightness, saturation):
    """
    Convert hue/lightness/saturation to a CSS color string

    Args:
        hue (float): Hue angle in degrees (240 = blue)
        lightness (float): Lightness in percent
        saturation (float): Saturation in percent

    Returns:
        str: Color string accepted by plotly, e.g. 'hsl(240,100%,52.5%)'
    """
    return f'hsl({hue % 360:g},{saturation:g}%,{lightness:g}%)'


def bucket_lightness(step):
    """
    Lightness for the bucket starting at step/100.

    0 at the centre of the scale gives the lightest color, +/-100 the darkest.
    """
    lightness = abs(step)
    lightness = MIN_LIGHTNESS + (MAX_LIGHTNESS - MIN_LIGHTNESS) / BUCKET_STEPS * lightness
    lightness = (MAX_LIGHTNESS + MIN_LIGHTNESS) - lightness
    return float(min(MAX_LIGHTNESS, max(MIN_LIGHTNESS, lightness)))


def build_color_scale():
    """
    Build the correlation color lookup table

    Returns:
        pd.DataFrame: One row per bucket with columns
            min, max, lightness, color, altcolor
    """
    rows = []
    for step in range(-BUCKET_STEPS, BUCKET_STEPS):
        lightness = bucket_lightness(step)
        color = hls_to_color(SCALE_HUE, lightness, SCALE_SATURATION)
        rows.append({
            'min': step / BUCKET_STEPS,
            'max': (step + 1) / BUCKET_STEPS,
            'lightness': lightness,
            'color': color,
            'altcolor': color
        })

    return pd.DataFrame(rows, columns=BUCKET_COLUMNS)


def find_bucket_index(values, buckets):
    """
    Locate the bucket holding each correlation value

    Buckets are half-open [min, max) except the last one, which is closed
    so that a correlation of exactly 1.00 still gets a color.

    Args:
        values (array-like): Correlation values
        buckets (pd.DataFrame): Table from build_color_scale()

    Returns:
        np.ndarray: Bucket positions, -1 where no bucket applies
    """
    values = np.asarray(values, dtype=float)
    mins = buckets['min'].to_numpy()
    upper = buckets['max'].iloc[-1]

    index = np.searchsorted(mins, values, side='right') - 1
    index = np.where(values == upper, len(buckets) - 1, index)

    outside = np.isnan(values) | (values < mins[0]) | (values > upper)
    return np.where(outside, -1, index).astype(int)


def bucket_colorscale(buckets):
    """
    Plotly colorscale reproducing the bucket colors as hard steps

    Args:
        buckets (pd.DataFrame): Table from build_color_scale()

    Returns:
        list: [[position, color], ...] with positions in [0, 1]
    """
    colorscale = []
    for _, bucket in buckets.iterrows():
        colorscale.append([(bucket['min'] + 1) / 2, bucket['color']])
        colorscale.append([(bucket['max'] + 1) / 2, bucket['color']])
    return colorscale
