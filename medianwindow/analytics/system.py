###########EXTERNAL IMPORTS############

import threading
from typing import List, Optional
import psutil

#######################################

#############LOCAL IMPORTS#############

from medianwindow.model.struct.sorted_window import SortedWindow
from medianwindow.model.window import WindowOptions, WindowStatistics
from medianwindow.util.debug import LoggerManager
import medianwindow.controller.config as config
import medianwindow.util.functions.performance as perf

#######################################


class SystemMonitor:
    """
    Rolling CPU and RAM usage statistics over the last N samples.

    A background sampler thread periodically reads the system usage and pushes
    it into two sorted windows, so the minimum, median and maximum usage over
    the configured history are available at any time without sorting.

    The sorted windows are not safe for concurrent use; every access from the
    sampler thread and from callers goes through a single lock.

    The monitor is explicitly started and stopped using `start()` and
    `stop()`. Samples can also be taken synchronously with `sample()`.

    Args:
        options (Optional[WindowOptions]): History capacity, DATA_SIZE_SECONDS samples by default.
        polling_interval (float): Seconds between two samples of the background thread.
    """

    POLLING_INTERVAL_SECONDS = 1.0
    DATA_SIZE_SECONDS = 60
    CPU_SAMPLE_INTERVAL_SECONDS = 0.1

    def __init__(self, options: Optional[WindowOptions] = None, polling_interval: float = POLLING_INTERVAL_SECONDS):
        self.options = options if options is not None else WindowOptions(capacity=self.DATA_SIZE_SECONDS)
        self.polling_interval = polling_interval
        self.cpu_usage_perc: SortedWindow[float] = SortedWindow(capacity=self.options.capacity)
        self.ram_usage_perc: SortedWindow[float] = SortedWindow(capacity=self.options.capacity)
        self.lock = threading.Lock()
        self.stop_event = threading.Event()
        self.sampler_thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config_file: str) -> "SystemMonitor":
        """
        Creates a monitor from a .env file holding WINDOW_CAPACITY,
        WINDOW_EVICT_FROM_FRONT and POLLING_INTERVAL_SECONDS.

        Raises:
            WindowConfigError: If the file is missing or holds invalid settings.
        """

        options = config.load_window_options(config_file)
        polling_interval = config.load_polling_interval(config_file)
        return cls(options=options, polling_interval=polling_interval)

    def start(self) -> None:
        """
        Starts the background sampler thread.

        Raises:
            RuntimeError: If the monitor is already running.
        """

        if self.sampler_thread is not None:
            raise RuntimeError("SystemMonitor is already running.")

        logger = LoggerManager.get_logger(__name__)
        self.stop_event.clear()
        self.sampler_thread = threading.Thread(target=self._sampler, daemon=True)
        self.sampler_thread.start()
        logger.info(f"System monitor started, {self.options.capacity} samples every {self.polling_interval}s")

    def stop(self) -> None:
        """
        Stops the background sampler thread and waits for it to finish.

        Raises:
            RuntimeError: If the monitor is not currently running.
        """

        if self.sampler_thread is None:
            raise RuntimeError("SystemMonitor is not running.")

        logger = LoggerManager.get_logger(__name__)
        self.stop_event.set()
        self.sampler_thread.join()
        self.sampler_thread = None
        logger.info("System monitor stopped")

    def is_running(self) -> bool:
        return self.sampler_thread is not None

    def _sampler(self) -> None:
        """
        Background sampler thread entry point.

        Takes one sample per polling interval until `stop_event` is set. A
        failed reading is logged and skipped; the thread keeps running.
        """

        logger = LoggerManager.get_logger(__name__)
        while not self.stop_event.is_set():
            try:
                self.sample()
            except psutil.Error as e:
                logger.warning(f"Could not sample system usage: {e}")
            self.stop_event.wait(timeout=self.polling_interval)

    def sample(self) -> None:
        """
        Reads the current CPU and RAM usage and pushes them into the history windows.
        """

        cpu_use_perc = round(perf.get_cpu_usage_percentage(interval=self.CPU_SAMPLE_INTERVAL_SECONDS), 2)
        ram_use_perc = round(perf.get_ram_usage_percentage(), 2)

        with self.lock:
            self.cpu_usage_perc.push_back(cpu_use_perc)
            self.ram_usage_perc.push_back(ram_use_perc)

    def resize_history(self, options: WindowOptions) -> None:
        """
        Changes the number of samples kept in both histories.

        Args:
            options (WindowOptions): New capacity and eviction end for shrinking.
        """

        logger = LoggerManager.get_logger(__name__)
        with self.lock:
            self.cpu_usage_perc.set_max_size(options.capacity, evict_from_front=options.evict_from_front)
            self.ram_usage_perc.set_max_size(options.capacity, evict_from_front=options.evict_from_front)
            self.options = options
        logger.info(f"System monitor history resized to {options.capacity} samples")

    def get_cpu_usage_statistics(self) -> WindowStatistics:
        """
        Returns min, median and max CPU usage over the history.
        """

        with self.lock:
            return self.cpu_usage_perc.get_statistics()

    def get_ram_usage_statistics(self) -> WindowStatistics:
        """
        Returns min, median and max RAM usage over the history.
        """

        with self.lock:
            return self.ram_usage_perc.get_statistics()

    def get_cpu_usage_history(self) -> List[float]:
        """
        Returns the CPU usage samples of the history in ascending order.
        """

        with self.lock:
            return self.cpu_usage_perc.to_list()

    def get_ram_usage_history(self) -> List[float]:
        """
        Returns the RAM usage samples of the history in ascending order.
        """

        with self.lock:
            return self.ram_usage_perc.to_list()
