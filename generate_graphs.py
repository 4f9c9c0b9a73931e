import matplotlib.pyplot as plt
from simulator import PageSizeSweep


def plot_hit_rates(matrix, filename):
    fig, ax = plt.subplots(figsize=(10, 6))
    fig.suptitle('Page Replacement Hit Rate by Page Size', fontsize=14, fontweight='bold')

    for algorithm in matrix.algorithms:
        points = [(page_size, rate)
                  for page_size, rate in enumerate(matrix.hit_rates(algorithm))
                  if rate is not None]
        if not points:
            continue
        x, y = zip(*points)
        ax.plot(x, y, marker='o', markersize=3, label=algorithm.name)

    ax.set_xlabel('Page Size')
    ax.set_ylabel('Hit Rate')
    ax.set_ylim(0, 1.05)
    ax.grid(alpha=0.3)
    ax.legend(loc='lower right', frameon=True)

    plt.tight_layout()
    plt.savefig(filename, dpi=300, bbox_inches='tight')
    plt.close(fig)


if __name__ == '__main__':
    print("Running page size sweep...")
    matrix = PageSizeSweep(num_processes=10, ram_size=32, process_size=64, random_seed=42).run()
    plot_hit_rates(matrix, 'hit_rate_comparison.png')
    print("\nGraph saved as 'hit_rate_comparison.png'")
