import argparse, os
from huffcodec.bitstream import FLAG_LEGACY, FLAG_TOKENS, write_header, write_tokens
from huffcodec.codec import HuffmanCoder
from huffcodec.metrics import average_code_length, compression_ratio, entropy_bits

def read_input(path: str, tokens: bool):
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    if not tokens:
        return text
    return [int(t) for t in text.split()]

def main(argv=None):
    ap = argparse.ArgumentParser(description="Huffman-compress a text file or an integer token file.")
    ap.add_argument("--input", required=True, help="path to UTF-8 text (or whitespace separated ints with --tokens)")
    ap.add_argument("--output", required=True, help="path to .huff")
    ap.add_argument("--tokens", action="store_true", help="treat input as integer tokens")
    ap.add_argument("--legacy", action="store_true", help="legacy symbol+digit dictionary (character mode only)")
    ap.add_argument("--show-tree", action="store_true", help="print the tree after building it")
    args = ap.parse_args(argv)
    if args.tokens and args.legacy:
        ap.error("--legacy only applies to character mode")

    data = read_input(args.input, args.tokens)

    coder = HuffmanCoder(legacy=args.legacy)
    compressed = coder.compress(data)

    flags = (FLAG_TOKENS if args.tokens else 0) | (FLAG_LEGACY if args.legacy else 0)
    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with open(args.output, "wb") as f:
        write_header(f, flags=flags)
        if args.tokens:
            write_tokens(f, compressed)
        else:
            f.write(compressed)

    # tokens are stored as int64 on disk, so count them at 8 bytes each
    original = len(data) * 8 if args.tokens else len(data.encode("utf-8"))
    size = os.path.getsize(args.output)
    print(f"[encode] wrote {args.output}")
    print(f"[encode] mode={'tokens' if args.tokens else 'text'}, symbols={len(data)}, distinct={len(coder.tree)}")
    print(f"[encode] avg_len={average_code_length(coder.tree):.3f} bits, entropy={entropy_bits(data):.3f} bits")
    print(f"[encode] {original}B -> {size}B (ratio {compression_ratio(original, size):.3f})")
    if args.show_tree:
        print(f"[encode] tree={coder}")

if __name__ == "__main__":
    main()
