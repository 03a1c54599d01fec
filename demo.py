"""
Bantam Front-End Demo

Scans and parses a small Bantam program, then prints its tokens, its AST
and the canonical source regenerated from the AST.
"""
import sys
sys.path.insert(0, '.')
from bantam import Scanner, ErrorHandler, ASTPrinter, SourcePrinter, parse_source
import io

SOURCE = '''
class Counter extends Object {
    int count = 0;

    int step(int by) {
        // advance and report
        this.count = this.count + by * 2;
        if (count > 10 && by != 0) return count;
        else count++;
        return 0;
    }
}
'''


def main():
    print('=== Bantam Front-End Demo ===')
    print()

    handler = ErrorHandler()
    tokens = Scanner(io.StringIO(SOURCE), handler).tokenize()
    print(f'[1] Scanned {len(tokens)} tokens, {len(handler)} errors')
    for token in tokens[:8]:
        print(f'    {token}')
    print('    ...')
    print()

    program = parse_source(SOURCE)
    print('[2] Parsed AST:')
    print(ASTPrinter().print(program))
    print()

    print('[3] Canonical source:')
    print(SourcePrinter().print(program))

    assert parse_source(SourcePrinter().print(program)) == program
    print('SUCCESS! Canonical source reparses to the same tree.')


if __name__ == '__main__':
    main()
