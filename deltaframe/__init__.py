"""Design document.

Abstractions related to image content:

Frame - Represents a single decoded image: an RGBA numpy array plus
        the urn it was read from or written to.

        Frames are immutable. The pixel array is read-only, so one
        frame can be handed to several worker threads at once. An
        operation that produces new pixels produces a new Frame.

Diff  - A frame that records only the pixels that changed from the
        previous frame of a sequence. Changed pixels carry the new
        color and are fully opaque; unchanged pixels are transparent.
        Diffs are plain PNG images.

Abstractions related to image processing:

Stage - One unit of work on a pair of frames: DiffFrames compares
        two neighbouring frames and saves the diff; ApplyDiff puts a
        diff onto the previous frame and saves the result. Stages
        keep timing statistics.

Pipeline - Holds the stages and decides how the frames reach them.
           DiffPipeline loads images in order and fans the pairs out
           to a bounded pool of threads. JoinPipeline is a strict
           chain: every reconstructed frame is the base for the next
           diff, so it runs in a single thread.

"""
