# epsflip

`epsflip` performs random walks in the flip graph of approximate tensor
decomposition schemes over GF(2). A scheme is a list of rank-one tensors whose
factors are polynomials in a formal parameter `e`, truncated at a maximum order
(4 by default). Flips and e-flips rewrite pairs of tensors. After every move the
scheme is normalised: common powers of `e` are pulled out of each tensor, any
tensor that vanishes at the working order is removed, and pairs of tensors that
can be merged are merged. A walk can therefore only keep or shrink the number of
tensors.

## Scheme files

Each line of a scheme file holds one rank-one tensor: an optional power of `e`
followed by up to three bracketed factors, built from the variables `a0`..`a15`,
`b0`..`b15` and `c0`..`c15`:

```
(a0+a3)(b0+b3)(c0+c3)
e*(a1+a2*e)(b4)(c1+c7*e^2)
e^2*(a5)(b6+b9)(c2)
```

The leading power is written `e*` or `e^2*` and must come at the start of the
line. Inside a factor, a term carries its own power as `a2*e` or `a2*e^3`.
Terms that do not follow this notation, or whose index is 16 or more, or whose
power is not below the maximum order, are ignored.

## Command line

```
epsflip FILENAME PATHLENGTH [CHECK] [--max-order N] [--seed S] [--output-dir DIR]
```

The command reads the scheme in `FILENAME`, performs up to `PATHLENGTH` random
moves (stopping early if no move is available), writes the result to a new file
named `k<number>.exp`, and prints that file's path and the number of tensors
left, separated by a comma.

If `CHECK` is given and is not zero, the scheme is expanded into single
monomials before and after the walk; the command prints `correct` if the two
expansions agree, and prints `ERROR HERE` to standard error and exits with
status 1 if they do not.

Options:

- `--max-order N`: work modulo `e^N` (default 4).
- `--seed S`: seed the random number generator, making the walk and the output
  file name reproducible.
- `--output-dir DIR`: directory for the output file (default: the current
  directory).

On a malformed command line the usage line is printed and the exit status is 1.
If the input file cannot be read, or the output file cannot be written, a
message goes to standard error and the exit status is 1.

## Library use

```python
import random

from epsflip.scheme import Scheme, expanded

scheme = Scheme.from_file("start.exp", max_order=4, rng=random.Random(1))
before = expanded(scheme)
scheme.random_walk(1000)
print(scheme.format())
path = scheme.write_to_file(".")
```

- `epsflip.tensor.Rank1Tensor` holds a term `e^coeff * (a)(b)(c)`; each factor
  is a list indexed by the power of `e` whose entries are 16-bit masks over the
  unknowns. `update()` normalises the term and returns `True` if it vanishes;
  `copy()` returns an independent copy.
- `epsflip.scheme.Scheme` holds the tensors and the list of available moves
  (`moves`, a list of `Move` values). `update()`, `flip()`, `eflip()` and
  `random_walk()` act on it in place; `format()` renders it in the text
  notation; `write_to_file()` writes it to a randomly named `k<number>.exp` file
  and returns the path; `check()` returns the monomials of its expansion as
  strings of the form `a<i> b<j> c<k> * e^<p>`.
- `epsflip.scheme.expanded(scheme)` returns a new scheme with one single-monomial
  tensor per monomial of odd multiplicity, in sorted order.
- `epsflip.notation` reads and writes the text format on its own: `parse_line`
  and `parse_scheme` read tensors, and `format_tensor` and `format_scheme` write
  them back.

## Running the tests

```
pip install -e ".[test]"
pytest
```