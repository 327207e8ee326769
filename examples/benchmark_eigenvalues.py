"""
Benchmark Bicycle Stability Demonstration

Demonstrates:
- Loading bicycle parameters from YAML
- Eigenvalues at a single speed and over a speed sweep
- Mode identification (weave, capsize, castor)
- Weave and capsize critical speeds
- Eigenvalue and root-locus plots
"""

import matplotlib
matplotlib.use('Agg')
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from whipple.analysis.stability import StabilityAnalyzer
from whipple.core.errors import WhippleError
from whipple.io.config import load_bicycle_config
from whipple.visualization.plotting import plot_eigenvalues_vs_speed, plot_root_locus, setup_plotting_style


def main():
    print("=" * 70)
    print("Whipple Bicycle Stability - Benchmark")
    print("=" * 70)
    print()

    config_path = os.path.join(os.path.dirname(__file__), 'benchmark.yaml')
    overrides = dict(arg.split('=', 1) for arg in sys.argv[1:] if '=' in arg)

    try:
        config = load_bicycle_config(config_path)
        parameters = config.parameters.with_overrides(overrides)
        analyzer = StabilityAnalyzer(parameters, max_condition=config.max_condition)

        print(f"Bicycle: {config.name}")
        print(f"Parameters: {parameters}")
        print()

        analyzer.print_stability_report(config.speed)

        vw, vc = analyzer.stable_speed_range()
        print(f"Weave speed:   {vw:.6f} m/s")
        print(f"Capsize speed: {vc:.6f} m/s")
        print()

        speeds = config.speeds()
        eigenvalues = analyzer.speed_sweep(speeds)
    except (WhippleError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    setup_plotting_style()
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    os.makedirs(output_dir, exist_ok=True)

    plot_eigenvalues_vs_speed(speeds, eigenvalues, stable_range=(vw, vc),
                              save_path=os.path.join(output_dir, 'eigenvalues_vs_speed.png'))
    plot_root_locus(eigenvalues, speeds,
                    save_path=os.path.join(output_dir, 'root_locus.png'))

    print(f"Plots saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
