# trecmeasures

Evaluation measures for ranked retrieval, computed one topic at a time as
the TREC evaluation measures define them. Each measure is a plain function:
give it the ranked judgments of one topic and any parameters it takes, and
it returns the value, or one value per cutoff for measures with cutoffs.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `trecmeasures.counts` | `ResRels`, `ResRelsJg`, `QueryRelInfo`; `num_ret`, `num_rel_ret`, `num_nonrel_judged_ret`, `num_rel`, `num_q`, `average_num_q`, `total_num_rel` |
| `trecmeasures.precision` | `precision_at_cutoffs` (P at document cutoffs), `r_precision` |
| `trecmeasures.recall_precision` | `iprec_at_recall`, `eleven_pt_avg`, `rprec_mult` |
| `trecmeasures.ap` | `average_precision`, `gm_map`, `map_cut`, `bin_g` |
| `trecmeasures.bpref` | `bpref`, `gm_bpref`, `inf_ap` |
| `trecmeasures.ndcg` | `ndcg`, `ndcg_cut`, `ndcg_rel`; the gain table `setup_gains`, `Gains`, `RelGain` |
| `trecmeasures.gain_measures` | `g_measure` (normalized gain G), `rndcg`, `ndcg_p` |
| `trecmeasures.avgjg` | averaged over judgment groups: `p_avgjg`, `rprec_mult_avgjg`, `map_avgjg` |
| `trecmeasures.prefs` | `EquivalenceClass`, `JudgmentGroup`, `ResultsPrefs`; `prefs_avgjg`, `prefs_avgjg_imp`, `prefs_avgjg_ret`, `prefs_avgjg_rnonrel`, `prefs_avgjg_rnonrel_ret` |
| `trecmeasures.zscores` | `ZScore`, `QueryZScores`, `ZScoreFormatError`; `parse_zscores`, `read_zscores` |

## Inputs

Most measures take a `ResRels`: the relevance value of each retrieved
document in rank order (`results_rel_list`), the number of judged documents
at each relevance level (`rel_levels`), and the counts `num_rel`,
`num_rel_ret`, `num_nonpool` and `num_unjudged_in_pool`. A retrieved
document outside the judgment pool has relevance `RELVALUE_NONPOOL` (-1);
one in the pool but unjudged has `RELVALUE_UNJUDGED` (-2).

```python
from trecmeasures.counts import ResRels
from trecmeasures.ap import average_precision
from trecmeasures.precision import precision_at_cutoffs, r_precision

topic = ResRels(
    results_rel_list=(1, 0, 1),
    rel_levels=(5, 3),
    num_rel=3,
    num_rel_ret=2,
)
precision_at_cutoffs(topic, cutoffs=(1, 2, 5))  # [1.0, 0.5, 0.4]
r_precision(topic)                              # 2/3
average_precision(topic)                        # (1/1 + 2/3) / 3
```

Measures over several judgment groups take a `ResRelsJg`, a tuple of
`ResRels`, one per group. The preference measures take a `ResultsPrefs`
made of `JudgmentGroup` values, whose preferences are given either by
`EquivalenceClass` lists or by a preference array.

`relevance_level` is the smallest judgment value that counts as relevant;
it defaults to 1. Default cutoffs are the document cutoffs 5, 10, 15, 20,
30, 100, 200, 500, 1000; the recall points 0.0, 0.1, ..., 1.0; and the
multiples of R 0.2, 0.4, ..., 2.0. Document cutoffs must be positive and
without duplicates, otherwise `ValueError` is raised; `eleven_pt_avg`
raises `ValueError` for an empty cutoff list. Cutoffs past the end of the
ranking are treated as filled with non-relevant documents.

`gm_map` and `gm_bpref` return the natural logarithm of the score, with the
score first raised to at least 0.00001, so that averaging the results over
topics gives a geometric mean.

### Gains

`ndcg`, `ndcg_rel`, `g_measure`, `rndcg` and `ndcg_p` use each relevance
level as its own gain, unless `gain_params` gives another gain for a level.
`gain_params` is a mapping or an iterable of `(level, gain)` pairs, where
the level is an integer or a string starting with one, for example
`{"1": 3.5, "2": 9.0, "4": 7.0}`. Gains may be zero or negative, and level
0 may be given a gain. `ndcg_cut` takes no gains: it uses the relevance
values themselves.

Some measures divide by quantities that can be zero on degenerate input
(for example `rndcg` with no point at which the ideal gain changes); they
then return `inf` or `nan` rather than raising.

## Z-score files

A z-score file holds one line per topic and measure, fields separated by
whitespace:

```
qid  measure_name  mean  stddev
```

```python
from trecmeasures.zscores import parse_zscores, read_zscores

text = "401 map 0.25 0.10\n401 P_10 0.40 0.15\n402 map 0.30 0.12\n"
per_query = parse_zscores(text)   # list of QueryZScores, sorted by qid then measure
from_file = read_zscores("reference.zscores")
```

A line without exactly four fields raises `ZScoreFormatError`, whose
`line_number` names the line; an empty file also raises it. Numeric fields
are read from their leading number, and read as 0.0 when they have none.

## What the package does not do

It has no command-line tool, and it does not read relevance judgment or
run files or build `ResRels`, `ResRelsJg` or `ResultsPrefs` from them.
It computes each measure for one topic; averaging over topics and printing
results are left to the caller (`average_num_q` and `total_num_rel` are the
only helpers that work across topics).