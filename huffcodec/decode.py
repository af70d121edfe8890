import argparse, os
from huffcodec.bitstream import read_header, read_tokens
from huffcodec.codec import HuffmanCoder

def main(argv=None):
    ap = argparse.ArgumentParser(description="Restore a file written by huff-encode.")
    ap.add_argument("--input", required=True, help="path to .huff")
    ap.add_argument("--output", required=True, help="path to restored text / token file")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        h = read_header(f)
        if h["tokens"]:
            stream = read_tokens(f)
        else:
            stream = f.read()

    coder = HuffmanCoder(legacy=h["legacy"])
    out = coder.decompress(stream)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with open(args.output, "w", encoding="utf-8", newline="") as f:
        if h["tokens"]:
            f.write(" ".join(str(v) for v in out) + "\n")
        else:
            f.write(out)

    print(f"[decode] wrote {args.output} symbols={len(out)} distinct={len(coder.tree)} mode={'tokens' if h['tokens'] else 'text'}")

if __name__ == "__main__":
    main()
