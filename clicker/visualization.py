from __future__ import annotations

from clicker.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 3-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install terminal-clicker[viz]"
        )

    fig, axes = plt.subplots(3, 1, figsize=(12, 12))
    fig.suptitle(
        f"Clicker Simulation: {report.strategy_description}",
        fontsize=14,
    )

    # 1. Points and lifetime total (log scale)
    ax1 = axes[0]
    if report.snapshots:
        times = [t for t, _ in report.points_series()]
        ax1.plot(
            times,
            [max(p, 1e-10) for _, p in report.points_series()],
            label="points",
        )
        ax1.plot(
            times,
            [max(s.total_earned, 1e-10) for s in report.snapshots],
            label="total earned",
        )
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Points")
    ax1.set_title("Points")
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.3)

    # 2. Production rate
    ax2 = axes[1]
    series = report.production_series()
    if series:
        times, rates = zip(*series)
        ax2.plot(times, rates)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Rate (/s)")
    ax2.set_title("Production Rate")
    ax2.grid(True, alpha=0.3)

    # 3. Purchase timeline
    ax3 = axes[2]
    if report.purchases:
        names = sorted({p.name for p in report.purchases})
        y_map = {n: i for i, n in enumerate(names)}
        ax3.scatter(
            [p.time for p in report.purchases],
            [y_map[p.name] for p in report.purchases],
            s=10,
            alpha=0.6,
        )
        ax3.set_yticks(range(len(names)))
        ax3.set_yticklabels(names, fontsize=7)
    ax3.set_xlabel("Time (s)")
    ax3.set_title("Purchase Timeline")
    ax3.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
