"""Command-line script for inspecting the tagger's most frequent confusions.

The script trains a tagger on a training file, labels a test file with the
averaged weights and prints the context of every test token where a given
gold label was tagged as a given predicted label. Without an explicit label
pair it lists the most frequent confusions instead, which is the usual
starting point for error analysis.
"""
import argparse
import sys
from pathlib import Path

# Add project root to path to allow for package imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from postag.config import Config, load_config
from postag.corpus import read_data
from postag.evaluation import ConfusionMatrix, extract_instances
from postag.pipeline import train
from postag.state import TaggerState


def main():
    parser = argparse.ArgumentParser(
        description="Show the context of tagging errors on a test file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--train", required=True, help="Path to the CoNLL training file.")
    parser.add_argument("--test", required=True, help="Path to the CoNLL test file.")
    parser.add_argument("--gold", help="Gold label of the confusion to show.")
    parser.add_argument("--pred", help="Predicted label of the confusion to show.")
    parser.add_argument("--top", type=int, default=10, help="Number of confusions listed without --gold/--pred.")
    parser.add_argument("--window", type=int, default=3, help="Tokens of context on each side.")
    parser.add_argument("--config", help="Path to a configuration YAML file.")
    args = parser.parse_args()

    try:
        cfg = load_config(args.config) if args.config else Config()
        for path in (args.train, args.test):
            if not Path(path).exists():
                raise FileNotFoundError(f"Corpus file not found at: {path}")

        state = TaggerState.from_tags(cfg.determiner_tags, cfg.adjective_tags, cfg.proper_noun_tags)
        train_data = read_data(args.train, state, training=True)
        test_data = read_data(args.test, state, training=False)
        if not train_data:
            raise ValueError(f"No sentences could be read from {args.train}.")

        train(train_data, test_data, state=state, cfg=cfg)

        if args.gold and args.pred:
            blocks = extract_instances(test_data, args.gold, args.pred, window=args.window)
            print(f"\n{len(blocks)} tokens tagged {args.pred} instead of {args.gold}:\n")
            for block in blocks:
                print(block)
        else:
            print("\n--- Most frequent confusions (gold -> predicted) ---")
            for gold, pred, count in ConfusionMatrix(test_data).most_confused(args.top):
                print(f"{gold:<8} -> {pred:<8} {count}")

    except (FileNotFoundError, ValueError, TypeError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
