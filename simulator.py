import argparse
import logging
import random
import sys
from concurrent.futures import ProcessPoolExecutor

from reference_string import generate_reference_string
from replacement import ALGORITHMS, evaluate
from stats import ResultMatrix, merge_rows

logger = logging.getLogger(__name__)


def page_geometry(page_size, ram_size, process_size):
    """
    Return (pages_per_process, num_frames) for a page size, or None for
    page size 0, which is not evaluated.
    """
    if page_size == 0:
        return None
    pages_per_process = -(-process_size // page_size)
    num_frames = ram_size // page_size
    return pages_per_process, num_frames


def skipped_row():
    return {algorithm: None for algorithm in ALGORITHMS}


def evaluate_row(reference_string, num_frames):
    """Run every algorithm over one reference string."""
    return {
        algorithm: evaluate(algorithm, reference_string, num_frames)
        for algorithm in ALGORITHMS
    }


def run_process(geometry, rng=None, reference_factory=generate_reference_string):
    """
    Simulate one process: draw its reference string and evaluate every
    algorithm against it. A None geometry yields a row of skipped results
    without drawing a reference string.
    """
    if geometry is None:
        return skipped_row()
    pages_per_process, num_frames = geometry
    reference_string = reference_factory(pages_per_process, rng)
    return evaluate_row(reference_string, num_frames)


class PageSizeSweep:

    def __init__(self, num_processes, ram_size, process_size, random_seed=None,
                 reference_factory=None, workers=1):
        for name, value in (('num_processes', num_processes),
                            ('ram_size', ram_size),
                            ('process_size', process_size),
                            ('workers', workers)):
            if value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value}")

        self.num_processes = num_processes
        self.ram_size = ram_size
        self.process_size = process_size
        self.workers = workers
        self.random_seed = random_seed
        self.reference_factory = reference_factory or generate_reference_string

    @property
    def max_page_size(self):
        return min(self.ram_size, self.process_size)

    def run_page_size(self, page_size, rng, executor=None):
        geometry = page_geometry(page_size, self.ram_size, self.process_size)
        row = {}

        if geometry is None:
            logger.debug("Page size %d: skipped", page_size)
        else:
            logger.debug("Page size %d: %d pages per process, %d frames",
                         page_size, *geometry)

        if executor is None or geometry is None:
            process_rows = (run_process(geometry, rng, self.reference_factory)
                            for _ in range(self.num_processes))
        else:
            pages_per_process, num_frames = geometry
            # Reference strings are drawn in process order so a seeded sweep
            # does not depend on the worker count
            references = [self.reference_factory(pages_per_process, rng)
                          for _ in range(self.num_processes)]
            process_rows = executor.map(evaluate_row, references,
                                        [num_frames] * len(references))

        for process_id, process_row in enumerate(process_rows):
            logger.debug("Page size %d, process %d: %s", page_size, process_id, process_row)
            merge_rows(row, process_row)
        return row

    def run(self):
        logger.info("Sweeping page sizes 0..%d for %d processes (RAM %d, process %d)",
                    self.max_page_size, self.num_processes, self.ram_size, self.process_size)
        # Every run starts again from the seed
        rng = random.Random(self.random_seed)
        matrix = ResultMatrix(ALGORITHMS)

        if self.workers > 1:
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                for page_size in range(self.max_page_size + 1):
                    matrix.append(self.run_page_size(page_size, rng, executor))
        else:
            for page_size in range(self.max_page_size + 1):
                matrix.append(self.run_page_size(page_size, rng))

        logger.info("Sweep finished: %d page sizes", len(matrix))
        return matrix


def format_rate(rate):
    if rate is None:
        return '-'
    return f"{rate:.6f}"


def format_table(matrix):
    """Render the hit-rate table, one row per evaluated page size."""
    table = [['Page Size'] + [f"{algorithm.name}(Hit Rate)" for algorithm in matrix.algorithms]]
    for page_size in range(1, len(matrix)):
        table.append([str(page_size)] +
                     [format_rate(matrix.hit_rate(page_size, algorithm))
                      for algorithm in matrix.algorithms])

    widths = [max(len(row[col]) for row in table) for col in range(len(table[0]))]
    lines = ["| " + " | ".join(cell.ljust(width) for cell, width in zip(row, widths)) + " |"
             for row in table]
    border = "-" * len(lines[0])
    return "\n".join([border] + lines + [border])


def positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def prompt_positive_int(parser, prompt):
    text = input(prompt)
    try:
        return positive_int(text.strip())
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compare OPT, FIFO, LRU and MRU hit rates across page sizes.")
    parser.add_argument('-n', '--processes', type=positive_int,
                        help="number of simulated processes")
    parser.add_argument('-r', '--ram-size', type=positive_int, help="RAM size")
    parser.add_argument('-p', '--process-size', type=positive_int, help="process size")
    parser.add_argument('-s', '--seed', type=int, default=None,
                        help="random seed for reproducible reference strings")
    parser.add_argument('-w', '--workers', type=positive_int, default=1,
                        help="worker processes used to evaluate processes (default: 1)")
    parser.add_argument('-g', '--graph', metavar='PATH',
                        help="also save a hit-rate graph to PATH")
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    if args.processes is None:
        args.processes = prompt_positive_int(parser, "Enter the number of processes: ")
    if args.ram_size is None:
        args.ram_size = prompt_positive_int(parser, "Enter the RAM size: ")
    if args.process_size is None:
        args.process_size = prompt_positive_int(parser, "Enter the process size: ")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    sweep = PageSizeSweep(args.processes, args.ram_size, args.process_size,
                          random_seed=args.seed, workers=args.workers)
    matrix = sweep.run()

    print("Results:")
    print(format_table(matrix))

    if args.graph:
        from generate_graphs import plot_hit_rates
        plot_hit_rates(matrix, args.graph)
        print(f"\nGraph saved as '{args.graph}'")

    return 0


if __name__ == '__main__':
    sys.exit(main())
