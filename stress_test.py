"""
Stress tests / adversarial evaluation of elmodiff.

This script attempts to BREAK the claimed properties:
  1. Round-trip law  apply(s, diff(s, t)) == t
  2. Escaping of ',' and '\\' in inserted text
  3. Heap invariant under random push / pop / remove
  4. Sampling weights proportional to score + 1
  5. Edge cases that might expose design flaws
"""

import sys, os, random, string, time, itertools
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from elmodiff import (
    Diff, PriorityQueue, ConstantPolicy, DecayPolicy,
    diff, apply, inverse, inverse_sqrt, exponential,
)


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


failures = 0


def check(name, condition, detail=""):
    global failures
    if not test(name, condition, detail):
        failures += 1


# ═══════════════════════════════════════════════════════════════
#  §1  ROUND-TRIP — exhaustive small cases
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  ROUND-TRIP — exhaustive check")
print("=" * 70)

# All non-empty strings of length ≤ 4 over alphabet {a, b, ,}
alphabet = "ab,"
all_strings = []
for length in range(1, 5):
    for combo in itertools.product(alphabet, repeat=length):
        all_strings.append("".join(combo))

random.seed(42)
sample_pairs = random.sample(
    [(s1, s2) for s1 in all_strings for s2 in all_strings],
    min(2000, len(all_strings) ** 2)
)

mismatches = 0
rng = random.Random(42)
for s1, s2 in sample_pairs:
    result = apply(s1, diff(s1, s2, trials=1, rng=rng))
    if result != s2:
        mismatches += 1
        if mismatches <= 5:
            print(f"    MISMATCH: {s1!r} → {s2!r} gave {result!r}")

check("Round-trip (2000 random pairs, len≤4)", mismatches == 0,
      f"{mismatches} mismatches")


# ═══════════════════════════════════════════════════════════════
#  §2  ROUND-TRIP — long mutated strings, every policy
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  ROUND-TRIP — long mutated strings")
print("=" * 70)

ALPHABET = string.ascii_letters + string.digits + " ,\\:-"


def mutate(source, rng, edits):
    chars = list(source)
    for _ in range(edits):
        at = rng.randrange(len(chars) + 1)
        run = rng.randint(1, 5)
        if rng.random() < 0.5:
            chars[at:at] = rng.choices(ALPHABET, k=run)
        else:
            del chars[at:at + run]
    return "".join(chars) or "x"


policies = [
    ("t^-0.45", DecayPolicy),
    ("t^-0.666", lambda: DecayPolicy(2.0 / 3)),
    ("1/t", inverse),
    ("1/sqrt(t)", inverse_sqrt),
    ("exp(-t/2)", exponential),
    ("greedy", lambda: ConstantPolicy(0.0)),
]

for name, make in policies:
    rng = random.Random(7)
    bad = 0
    total_len = 0
    start = time.time()
    for _ in range(10):
        source = "".join(rng.choices(ALPHABET, k=rng.randint(500, 1500)))
        target = mutate(source, rng, rng.randint(1, 15))
        script = diff(source, target, trials=1, policy=make(), rng=rng)
        total_len += len(script)
        if apply(source, script) != target:
            bad += 1
    elapsed = time.time() - start
    check(f"Policy {name:<10} 10 trials", bad == 0,
          f"{bad} failures, mean script {total_len / 10:.0f} chars, {elapsed:.2f}s")


# ═══════════════════════════════════════════════════════════════
#  §3  ESCAPING
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  ESCAPING")
print("=" * 70)

nasty = [",", "\\", ",,", "\\\\", "\\,", ",\\", "a,b\\c", "0:1", "1-2", ":-,\\"]
rng = random.Random(3)
esc_failures = 0
for a in nasty:
    for b in nasty:
        for base in ("x", "hello"):
            src, trg = base + a, b + base
            if apply(src, diff(src, trg, trials=1, rng=rng)) != trg:
                esc_failures += 1
check(f"Escapes round-trip ({len(nasty) ** 2 * 2} pairs)", esc_failures == 0,
      f"{esc_failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §4  PRIORITY QUEUE
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  PRIORITY QUEUE")
print("=" * 70)


def heap_ok(q):
    s = q.scores
    return all(s[(i - 1) // 2] >= s[i] for i in range(1, len(s)))


rng = random.Random(123)
q = PriorityQueue()
violations = 0
pushes = pops = 0
for i in range(20000):
    roll = rng.random()
    if roll < 0.5:
        q.push(i, rng.random() * 100)
        pushes += 1
    elif roll < 0.75:
        if q.pop() is not None:
            pops += 1
    elif not q.is_empty():
        q.remove(rng.randrange(q.size))
        pops += 1
    if not heap_ok(q):
        violations += 1
check("Heap invariant (20000 random ops)", violations == 0, f"{violations} violations")
check("Size accounting", q.size == pushes - pops, f"{q.size} vs {pushes - pops}")

q = PriorityQueue().push("a", 0).push("b", 1).push("c", 2)
n = 30000
counts = {"a": 0, "b": 0, "c": 0}
for _ in range(n):
    counts[q.sample(rng)[0]] += 1
freqs = {k: v / n for k, v in counts.items()}
expected = {"a": 1 / 6, "b": 1 / 3, "c": 1 / 2}
worst = max(abs(freqs[k] - expected[k]) for k in expected)
check("Sampling ∝ score+1 (scores 0,1,2)", worst < 0.02,
      ", ".join(f"{k}={freqs[k]:.3f}" for k in sorted(freqs)))


# ═══════════════════════════════════════════════════════════════
#  §5  EDGE CASES
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §5  EDGE CASES")
print("=" * 70)

check("Equal inputs give empty script", diff("hello world", "hello world") == "")
check("Empty script is identity", apply("hello world", "") == "hello world")

src, trg = "a" * 300, "b" * 300
check("Disjoint alphabets", apply(src, diff(src, trg, trials=1)) == trg)

src, trg = "ab" * 200, "ba" * 200
check("Shifted period", apply(src, diff(src, trg, trials=1)) == trg)

d = Diff("ABCABBA", "CBABAC")
path = [d.node(x, y) for x, y in [(7, 6), (7, 5), (5, 4), (3, 1), (1, 0), (0, 0)]]
check("Known fixture", d.serialize(path) == "0-1,1:B,5,5:C", d.serialize(path))

print()
print(f"{failures} failure(s)")
sys.exit(1 if failures else 0)
