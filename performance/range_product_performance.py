from time import time
from statistics import mean
import math

import numpy
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg as FigureCanvas
from matplotlib.ticker import MaxNLocator

from threaded_range_product import range_product, range_product_with_executor
from performance_utils import (
    PERFORMANCE_CHARTS_DIR,
    BLUE,
    RED,
    GREY,
    get_python_version,
)


def do_non_threaded_experiment(start, end, num_repeats):
    times = []
    for _ in range(num_repeats):
        time_start = time()
        result = math.prod(range(start, end))
        times.append(time() - time_start)
    return {"time": mean(times), "result": result}


def do_threaded_experiment(
    num_threadss, range_product_fn, start, end, int_width, num_repeats
):
    times = []
    results = []
    for num_threads in num_threadss:
        times_used = []
        for _ in range(num_repeats):
            time_start = time()
            result = range_product_fn(num_threads, start, end, int_width=int_width)
            times_used.append(time() - time_start)
        times.append(mean(times_used))
        results.append(result)
    return {
        "times": numpy.array(times),
        "num_threadss": num_threadss,
        "results": results,
    }


def check_range_product_performance():
    start = 1
    end = 50_000_000
    # 64 bit wraparound keeps every multiplication at machine speed
    int_width = 64
    num_threadss = list(range(1, 7))
    num_repeats = 3

    experiment = {
        "num_threadss": num_threadss,
        "start": start,
        "end": end,
        "int_width": int_width,
        "num_repeats": num_repeats,
    }
    result_threads = do_threaded_experiment(
        range_product_fn=range_product, **experiment
    )
    result_executor = do_threaded_experiment(
        range_product_fn=range_product_with_executor, **experiment
    )
    assert len(set(result_threads["results"] + result_executor["results"])) == 1

    one_thread_time = result_threads["times"][0]
    ideal_times = one_thread_time / numpy.array(num_threadss)

    fig = Figure()
    _canvas = FigureCanvas(fig)
    axes = fig.add_subplot(1, 1, 1)
    axes.plot(
        num_threadss,
        result_threads["times"],
        linestyle="-",
        marker="o",
        color=BLUE,
        label="threads",
    )
    axes.plot(
        num_threadss,
        result_executor["times"],
        linestyle="-",
        marker="o",
        color=RED,
        label="executor",
    )
    axes.plot(
        num_threadss,
        ideal_times,
        linestyle="--",
        color=GREY,
        label="ideal",
    )
    axes.set_xlabel("Num. threads")
    axes.set_ylabel("Time (s)")
    axes.xaxis.set_major_locator(MaxNLocator(integer=True))
    axes.legend()

    PERFORMANCE_CHARTS_DIR.mkdir(exist_ok=True)
    plot_path = (
        PERFORMANCE_CHARTS_DIR / f"range_product_performance.{get_python_version()}.svg"
    )
    fig.savefig(plot_path)


def check_exact_product_performance():
    start = 1
    end = 100_000
    num_threadss = list(range(1, 7))
    result_non_threaded = do_non_threaded_experiment(start, end, num_repeats=3)
    print(f"time non threaded: {result_non_threaded['time']}")
    result_threads = do_threaded_experiment(
        num_threadss, range_product, start, end, int_width=None, num_repeats=3
    )
    for num_threads, time_used, result in zip(
        num_threadss, result_threads["times"], result_threads["results"]
    ):
        assert result == result_non_threaded["result"]
        print(f"time {num_threads} threads: {time_used}")


if __name__ == "__main__":
    check_range_product_performance()
    check_exact_product_performance()
