###
# title: timing.py
# language: python3
#
# date: 2024-12-11
# license: GPLv3
# author: bue, willem
#
# run: python3 timing.py var 1 2 3 --run 5
#
# descriprion:
#   times every compiler pass over a test family with the pass checker
#   and writes the median runtimes as csv and as plot.
#####


# library
import argparse
import sys
from typing import Sequence

import matplotlib.pyplot as plt
import pandas as pd

from driver import load_passes
from errors import HarnessError
from passes import Pass, check_passes, expand_family
import utils


def time_passes(compiler_name: str, passes: Sequence[Pass], family: str,
                indices: Sequence[int], i_run: int = 5, **kwargs) -> pd.DataFrame:
    lls_data = []
    for s_test in expand_family(family, indices):
        for i in range(i_run):
            print(f'processing: {compiler_name} {s_test} {i+1}/{i_run} ...')
            timings = []
            check_passes(compiler_name, passes, s_test, timings=timings, **kwargs)
            for (s_pass, r_runtime) in timings:
                lls_data.append([s_test, s_pass, i, r_runtime * 1000])
    return pd.DataFrame(lls_data, columns=['test', 'pass', 'run', 'runtime_ms'])


def summarize(df_data: pd.DataFrame) -> pd.DataFrame:
    df_ave = df_data.groupby(['test', 'pass'], sort=False).median().reset_index()
    df_ave.drop('run', axis=1, inplace=True)
    return df_ave


def plot_timing(df_ave: pd.DataFrame, s_png: str, title: str = 'compilation time per pass'):
    fig, ax = plt.subplots(figsize=(11, 8.5))
    for s_pass in df_ave['pass'].unique():
        df_ave.loc[df_ave['pass'] == s_pass, :].plot(
            x = 'test',
            y = 'runtime_ms',
            style = 's:',
            ylabel = 'runtime_ms',
            label = s_pass,
            grid = True,
            title = title,
            ax = ax
        )
    plt.tight_layout()
    fig.savefig(s_png, facecolor='white')
    plt.close(fig)
    return fig


def main(argv=None):
    parser = argparse.ArgumentParser(description='time compiler passes over a test family')
    parser.add_argument('family', help='test family, e.g. var')
    parser.add_argument('indices', nargs='+', type=int, help='test numbers')
    parser.add_argument('--compiler', default='compiler:Compiler', help='module:attribute of the compiler')
    parser.add_argument('--run', type=int, default=5, help='runs per test')
    parser.add_argument('--out', default='pass_timing', help='output file name without extension')
    args = parser.parse_args(argv)

    try:
        df_data = time_passes(args.compiler, load_passes(args.compiler), args.family,
                              args.indices, i_run=args.run, tracer=utils.Tracer())
    except HarnessError as e:
        sys.exit(f'Error: {e}')
    df_ave = summarize(df_data)
    print(df_ave)
    df_ave.to_csv(f'{args.out}.csv', index=False)
    plot_timing(df_ave, f'{args.out}.png')


if __name__ == '__main__':
    main()
