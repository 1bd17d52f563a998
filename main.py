import argparse
import sys
from pathlib import Path

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from postag.config import Config, load_config
from postag.corpus import read_data
from postag.evaluation import ConfusionMatrix, accuracy
from postag.features import extract_all_features
from postag.io_utils import load_state, read_features, save_predictions, save_state, save_weights, write_features
from postag.pipeline import train
from postag.state import TaggerState

STATE_SUFFIX = ".state.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train an averaged-perceptron part-of-speech tagger on a CoNLL file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("train", help="Path to the training file (CoNLL, or a feature file with --read-features).")
    parser.add_argument("-t", "--test", help="Path to a CoNLL test file to annotate and evaluate.")
    parser.add_argument("-w", "--weights", help="Write the learned weights to this file.")
    parser.add_argument("--averaged-weights", action="store_true",
                        help="Write the averaged weights instead of the last training weights.")
    parser.add_argument("-p", "--predictions",
                        help="Write predictions to <path>-train (and <path>-test when a test file is given).")
    parser.add_argument("-s", "--save-features",
                        help="Write the extracted training features to this file, plus the tagger state "
                             f"to <path>{STATE_SUFFIX}.")
    parser.add_argument("-r", "--read-features", action="store_true",
                        help="Treat the training file as a feature file written with --save-features.")
    parser.add_argument("--config", help="Path to a configuration YAML file.")
    parser.add_argument("--epochs", type=int, help="Override the number of training epochs.")
    parser.add_argument("--seed", type=int, help="Override the shuffling seed.")
    parser.add_argument("--no-progress", action="store_true", help="Hide the training progress bar.")
    return parser


def load_training_data(args: argparse.Namespace, cfg: Config):
    """Returns the tagger state, training sentences and whether they still need features."""
    train_path = Path(args.train)
    if not train_path.exists():
        raise FileNotFoundError(f"Training file not found at: {train_path}")

    if args.read_features:
        state = load_state(str(train_path) + STATE_SUFFIX)
        print(f"Reading training features from {train_path}...")
        return state, read_features(str(train_path), state), False

    state = TaggerState.from_tags(cfg.determiner_tags, cfg.adjective_tags, cfg.proper_noun_tags)
    print(f"Reading training data from {train_path}...")
    return state, read_data(str(train_path), state, training=True), True


def main():
    """
    Main command-line interface for the perceptron tagger.

    This script:
    1.  Loads the configuration and the training data (CoNLL or a saved
        feature file).
    2.  Optionally loads a test file, which is labelled with the averaged
        weights after training.
    3.  Extracts features, trains the perceptron and reports accuracy, plus a
        confusion matrix of the test data.
    4.  Optionally writes weights, predictions and extracted features.
    """
    args = build_parser().parse_args()

    try:
        cfg = load_config(args.config) if args.config else Config()
        if args.epochs is not None:
            cfg.epochs = args.epochs
        if args.seed is not None:
            cfg.seed = args.seed

        state, train_data, extract = load_training_data(args, cfg)
        if not train_data:
            raise ValueError(f"No sentences could be read from {args.train}.")

        test_data = None
        if args.test:
            if not Path(args.test).exists():
                raise FileNotFoundError(f"Test file not found at: {args.test}")
            print(f"Reading test data from {args.test}...")
            test_data = read_data(args.test, state, training=False)
            if not extract:
                extract_all_features(test_data, state)

        perceptron = train(train_data, test_data, state=state, cfg=cfg,
                           extract=extract, progress=not args.no_progress)

        print(f"Accuracy on training data: {accuracy(train_data)}")
        if test_data is not None:
            print("Confusion matrix of test data:")
            ConfusionMatrix(test_data).print(min(cfg.confusion_dim, state.num_classes()))
            print(f"Accuracy on test data: {accuracy(test_data)}")

        if args.weights:
            save_weights(args.weights, perceptron, averaged=args.averaged_weights)
            print(f"Saved weights to {args.weights}")

        if args.predictions:
            save_predictions(args.predictions + "-train", train_data)
            if test_data is not None:
                save_predictions(args.predictions + "-test", test_data)
            print(f"Saved predictions with prefix {args.predictions}")

        if args.save_features:
            write_features(args.save_features, train_data)
            save_state(args.save_features + STATE_SUFFIX, state)
            print(f"Saved features to {args.save_features}")

    except (FileNotFoundError, ValueError, TypeError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
