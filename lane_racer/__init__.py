"""
Lane Racer
==========

A single-screen lane-dodging arcade game. The player changes lanes to avoid
traffic scrolling down the road; score and speed rise over time.

The racer_core package holds the headless simulation (scoring, spawning,
collision, lifecycle), the renderers and the Gymnasium wrapper. All tunable
parameters are in game_config.yaml.
"""
