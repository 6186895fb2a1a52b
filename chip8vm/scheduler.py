#!/usr/bin/env python3

"""
Clock Scheduler

Drives the machine against real time.  There are three separate clocks:

    * CPU        - clock_speed instructions per second (400 by default)
    * Timers     - always 60 ticks per second
    * Display    - input polling and rendering at 60Hz

The CPU and timer clocks each keep a count of how many steps they should have
run since the scheduler started, worked out from the total elapsed time rather
than by adding up intervals, so rounding never builds up into drift.  Each
time slice, every CPU step that has fallen due runs first (in program order),
then every due timer tick.  Changing the CPU speed therefore never changes how
fast the timers count down.

While the CPU is waiting for a keypress, its steps don't count as instructions
and the rest of that slice's budget is dropped.  The display and inputs carry
on as normal.

Fatal CPU errors are not caught here.  They stop the loop and propagate to
whoever called run().
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, DISPLAY_FREQ, TIMER_FREQ

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
PERF_REPORT_INTERVAL = 1.0
# Absorbs float error when the elapsed time lands exactly on a step boundary
STEP_EPSILON = 1e-9


class Scheduler:
    def __init__(self, cpu, timers, framebuffer, inputs, renderer, audio, clock_speed=None, clock=perf_counter):
        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        if clock_speed <= 0:
            raise ValueError("Clock speed must be a positive number of instructions per second")

        self.cpu = cpu
        self.timers = timers
        self.framebuffer = framebuffer
        self.inputs = inputs
        self.renderer = renderer
        self.audio = audio
        self.clock_speed = clock_speed
        self.clock = clock

        # Accumulated time and how many of each clock's steps have been dealt with so far
        self.elapsed = 0.0
        self.cpu_steps_done = 0
        self.timer_ticks_done = 0
        self.buzzer_enabled = False

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0

    def advance(self, elapsed):
        # Run everything owed for another 'elapsed' seconds.  Returns the number of instructions and timer ticks run.
        self.elapsed += elapsed
        cpu_steps_due = int(self.elapsed * self.clock_speed + STEP_EPSILON)
        timer_ticks_due = int(self.elapsed * TIMER_FREQ + STEP_EPSILON)
        ops = 0

        for _ in range(cpu_steps_due - self.cpu_steps_done):
            if not self.cpu.step():
                # Waiting for a key.  Don't let the budget pile up in the meantime.
                break

            ops += 1

        self.cpu_steps_done = cpu_steps_due
        ticks = timer_ticks_due - self.timer_ticks_done

        for _ in range(ticks):
            self.timers.tick()

        self.timer_ticks_done = timer_ticks_due
        self.update_buzzer()
        self.perf_counter_ops += ops

        return ops, ticks

    def update_buzzer(self):
        # Only call the audio plugin when the state actually changes
        sound_active = self.timers.is_sound_active()

        if sound_active != self.buzzer_enabled:
            self.audio.enable_buzzer(sound_active)
            self.buzzer_enabled = sound_active

    def refresh_display(self):
        self.renderer.refresh_display(self.framebuffer)
        self.perf_counter_fps += 1

    def report_perf(self):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, self.perf_counter_fps, self.perf_counter_ops))
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0

    def run(self):
        # Returns when the user quits.  CPU errors are raised.
        clock = self.clock
        last_time = clock()
        next_display_update_time = last_time
        next_perf_report_time = last_time + PERF_REPORT_INTERVAL
        cpu_interval = 1.0 / self.clock_speed

        while True:
            this_time = clock()

            # Process inputs at 60Hz along with the display, to avoid slowdown
            if this_time >= next_display_update_time:
                if self.inputs.process_messages():
                    return

                self.refresh_display()
                next_display_update_time = this_time + DISPLAY_INTERVAL

            if this_time >= next_perf_report_time:
                self.report_perf()
                next_perf_report_time = this_time + PERF_REPORT_INTERVAL

            self.advance(this_time - last_time)
            last_time = this_time

            # Sleep until the next CPU step is due, or the next frame if that comes first
            wait_time = min(cpu_interval, next_display_update_time - clock())

            if wait_time > 0:
                sleep(wait_time)
