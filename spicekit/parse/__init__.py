"""Parsers for netlist tokens, source lines and .MEAS statements."""