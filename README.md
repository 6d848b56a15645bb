# spicekit

A small library for working with pieces of SPICE netlists in Python. It covers:

- engineering numbers with SI suffixes and unit-tagged quantities,
- independent sources and their waveforms (DC, AC, SIN, PWL, PULSE), written
  out as netlist text and evaluated at any time,
- simulation and measurement control statements (`.DC`, `.AC`, `.TRAN`,
  `.MEAS`, `.include`) written out as netlist text,
- parsing of source lines and `.MEAS` statements,
- lookup and interpolation of simulation results, and plotting them to image
  files with matplotlib.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Numbers and quantities

`spicekit.units` holds the value types used everywhere else.

```python
from spicekit.units import Number, Quantity, Suffix, Unit

r = Number(1.5, Suffix.KILO)
print(r, r.to_float())              # 1.5k 1500.0
print(Number(2, Suffix.MEGA).to_spice())   # 2Meg

v = Quantity.of(5, Unit.VOLTAGE)
print(v, v + Quantity.of(0.5, Unit.VOLTAGE))   # 5V 5.5V
```

`Quantity.of` accepts a quantity of the same unit, a `Number` or a plain float,
and raises `TypeError` for a quantity of another unit. Quantities of the same
unit can be added, subtracted, compared and divided (giving a float), and
scaled by a float.

`Value` holds a real or complex simulation value; `extract_numbers`,
`extract_complexes`, `extract_units` and `extract_unit_complexes` turn a list of
values into numbers, `(re, im)` pairs or quantities, or return `None` when the
list mixes the wrong kind.

## Sources and waveforms

`spicekit.sources` has `Source` (a named source between two nodes) and its
value types: a voltage or current `Quantity` for DC, `AcVoltage`, `AcCurrent`,
`SineVoltage`, `PwlVoltage` and `PulseVoltage`.

```python
from spicekit.sources import PulseVoltage, SineVoltage, Source

clk = PulseVoltage.clock(1.8, 10e-9, 1e-9)
print(clk.to_spice())
print(clk.voltage_at(5e-9))

sine = SineVoltage.sin(1.0, 1e3)
print(sine.period(), sine.voltage_at(0.25e-3))

print(Source("clk", "clk", "0", clk).to_spice())
```

`SineVoltage.cos` gives a cosine as a sine delayed by a negative quarter
period. `PwlVoltage.voltage_at` interpolates linearly between its points and
holds the last value after the final point.

## Control statements

`spicekit.control` has `DcCommand`, `AcCommand` (with `AcCommand.linear`,
`.dec` and `.oct`), `TranCommand` and `IncludeCommand`, each with
`to_spice()`, and the data types of `.MEAS` statements: `MeasureRise`,
`MeasureBasicStat`, `MeasureFindWhen` and their conditions and output
variables (`VoltageOutput`, `CurrentOutput`).

```python
from spicekit.control import AcCommand, TranCommand

print(TranCommand(1e-9, 100e-9, t_max=10e-9, uic=True).to_spice())
print(AcCommand.dec(10, 1, 1e6).to_spice())
```

## Parsing

Every parser takes the remaining text and returns `(rest, value)`. A parser
that does not match raises `spicekit.parse.lexer.ParseError`; once a statement
has been recognised, a later mismatch raises `ParseFailure`.

- `spicekit.parse.lexer`: tokens such as `identifier`, `node`, `number`,
  `time_number`, `voltage_number`, `current_number`, `resistance_number`,
  `capacitance_number`, `inductance_number`, `comment` and `smart_space0`
  (spacing that also skips `+` continuation lines).
- `spicekit.parse.stimuli`: `source` for whole `V`/`I` lines, and
  `dc_voltage`, `dc_current`, `ac_voltage`, `ac_current`, `sine_voltage`,
  `pwl_voltage`, `pulse_voltage`.
- `spicekit.parse.measures`: `measure_command` for `.MEAS` statements.

```python
from spicekit.parse.stimuli import source
from spicekit.parse.measures import measure_command

rest, src = source("Vsig n1 0 SIN(0 1 1k 0.1 0.05 45)")
print(src.name, src.value.freq_hz)

rest, meas = measure_command(".MEAS TRAN avgval AVG V(n1) FROM=10u TO=55u")
print(meas.stat, meas.from_, meas.to)
```

## Results and plots

`spicekit.probe.tran.TranAnalysis` holds transient waveforms by node and
branch name; `get_voltage_at` and `get_current_at` interpolate between
samples and raise `NoSuchNode`, `NoSuchBranch`, `TimeOutOfRange` or
`InnerError` from `spicekit.probe.errors`.

`spicekit.probe.sweep` has `OpAnalysis` (lookups in lower case), `DcAnalysis`
(`get_voltage_at` returns `None` outside the sweep) and `AcAnalysis`, which
plots gain (`draw_gain`) and relative phase (`draw_phase`) between two nodes
against log10 of the frequency.

Plots are drawn by `spicekit.draw.Drawer`, which writes an image file through
matplotlib with all signals on one chart, or one chart per signal when
`split=True`. Plotting problems raise `DrawerError`, wrapped in `PlotError`
by the analysis classes.

```python
from spicekit.draw import Drawer
from spicekit.probe.tran import TranAnalysis
from spicekit.units import Quantity, Unit

t = [Quantity.of(x, Unit.TIME) for x in (0.0, 1e-9, 2e-9)]
v = [Quantity.of(x, Unit.VOLTAGE) for x in (0.0, 1.0, 0.5)]
tran = TranAnalysis(time=t, nodes={"out": v})
print(tran.get_voltage_at("out", 0.5e-9))
tran.draw_all_nodes(Drawer(), "out.png")
```

## What it does not do

spicekit does not build whole circuits, subcircuits or instances, has no
classes for resistors, capacitors, inductors, diodes, transistors or device
models, and does not read complete netlist files: only source lines and
`.MEAS` statements are parsed. It does not run a simulator; analysis results
must be filled in by the caller.