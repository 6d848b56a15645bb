"""Simulation results: lookup, interpolation and plotting."""