import csv
import logging
import random
import statistics
import sys
import time

from .datastructures.associative_array import AssociativeArray

logger = logging.getLogger(__name__)

# Input sizes are DEFAULT_BASE_INPUT * 2**i for i in range(DEFAULT_STEPS).
# Lookups are linear, so inserting n keys is O(n^2); keep the top size modest.
DEFAULT_BASE_INPUT = 100
DEFAULT_STEPS = 6
DEFAULT_ITERATIONS = 5

CSV_HEADER = [
    "Input Size",
    "Operation",
    "Average Time (ms)",
    "Standard Deviation (ms)",
    "Average Space (bytes)",
]

# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_pairs(size: int):
    """Generate a list of random key-value pairs."""
    return [(random.randint(0, size * 10), random.randint(0, 1000000)) for _ in range(size)]


def build(data) -> AssociativeArray:
    aa = AssociativeArray()
    for k, v in data:
        aa.set(k, v)
    return aa


def measure_operation_time(operation, input_size: int, iterations: int = DEFAULT_ITERATIONS):
    """Run the operation multiple times and return average + std deviation (ms)."""
    times = []
    for _ in range(iterations):
        data = generate_random_pairs(input_size)
        start = time.perf_counter()
        operation(data)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # convert to milliseconds

    avg_time = statistics.mean(times)
    std_dev = statistics.stdev(times) if len(times) > 1 else 0.0
    return avg_time, std_dev


def measure_true_space(aa: AssociativeArray) -> int:
    """Estimate memory used by the array: object, slot buffer, pairs, keys and values."""
    total = sys.getsizeof(aa)
    total += sys.getsizeof(aa._pairs._buf)
    for i in range(aa.size()):
        pair = aa._pairs[i]
        total += sys.getsizeof(pair)
        total += sys.getsizeof(pair.key)
        total += sys.getsizeof(pair.value)
    return total


def measure_space_efficiency(operation, input_size: int, iterations: int = 3) -> float:
    """Return average memory used by the array the operation leaves behind (bytes)."""
    sizes = []
    for _ in range(iterations):
        data = generate_random_pairs(input_size)
        sizes.append(measure_true_space(operation(data)))
    return statistics.mean(sizes)

# ----------------------------
# Operations to Benchmark
# ----------------------------

def op_set(data):
    return build(data)


def op_get(data):
    aa = build(data)
    for k, _ in data[:3]:
        _ = aa.get(k)
    return aa


def op_has_key(data):
    aa = build(data)
    for k, _ in data[:3]:
        _ = aa.has_key(k)
    return aa


def op_remove(data):
    aa = build(data)
    for k, _ in data[:3]:
        aa.remove(k)
    return aa


def op_clone(data):
    return build(data).clone()


def op_to_string(data):
    aa = build(data)
    _ = str(aa)
    return aa


OPERATIONS = {
    "set": op_set,
    "get": op_get,
    "has_key": op_has_key,
    "remove": op_remove,
    "clone": op_clone,
    "to_string": op_to_string,
}

# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(
    output_file: str,
    base_input: int = DEFAULT_BASE_INPUT,
    steps: int = DEFAULT_STEPS,
    iterations: int = DEFAULT_ITERATIONS,
    out=None,
) -> int:
    """Run exponential performance tests for AssociativeArray operations.

    Writes one CSV row per (operation, size) and echoes it to *out*
    (stdout by default). Returns the number of rows written.
    """
    out = out or sys.stdout
    input_sizes = [base_input * (2 ** i) for i in range(steps)]
    logger.debug("Benchmarking %d operations over sizes %s", len(OPERATIONS), input_sizes)

    rows = 0
    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_HEADER)

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time = measure_operation_time(op_func, size, iterations)
                avg_space = measure_space_efficiency(op_func, size)
                writer.writerow([size, op_name, f"{avg_time:.3f}", f"{std_time:.3f}", f"{avg_space:.0f}"])
                rows += 1
                print(f"{op_name:<10} | Size: {size:<8} | Avg Time: {avg_time:.3f} ms | "
                      f"Std: {std_time:.3f} ms | Avg Space: {avg_space:.0f} bytes", file=out)

    print(f"\nBenchmark completed. Results saved to {output_file}", file=out)
    return rows
